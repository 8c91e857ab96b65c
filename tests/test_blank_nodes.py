import pytest

from rdfxml_triples.blank_nodes import BlankNodeGenerator
from rdfxml_triples.errors import InvalidBlankNodeError
from rdfxml_triples.models import BlankNodeID


def test_generates_sequential_labels():
    gen = BlankNodeGenerator()
    assert gen.generate() == BlankNodeID("gen-1")
    assert gen.generate("list") == BlankNodeID("gen-2-list")
    assert gen.counter == 2


def test_skips_observed_labels():
    gen = BlankNodeGenerator()
    gen.observe("gen-1")
    gen.observe("gen-3-resource")
    assert gen.generate() == BlankNodeID("gen-2")
    assert gen.generate("resource") == BlankNodeID("gen-4-resource")
    assert gen.observed == {"gen-1", "gen-3-resource"}


def test_custom_prefix():
    assert BlankNodeGenerator("b").generate() == BlankNodeID("b-1")


def test_invalid_prefix():
    with pytest.raises(InvalidBlankNodeError):
        BlankNodeGenerator("-x")


def test_explicit_label_after_generation_is_remapped():
    gen = BlankNodeGenerator()
    assert gen.generate() == BlankNodeID("gen-1")
    assert gen.observe("gen-1") == "gen-2"
    # Later uses of the same explicit label refer to the same node.
    assert gen.observe("gen-1") == "gen-2"
    assert gen.generate() == BlankNodeID("gen-3")
    assert gen.observe("other") == "other"
