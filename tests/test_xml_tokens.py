import io

import pytest

from rdfxml_triples.errors import XMLIOError
from rdfxml_triples.xml_tokens import (
    XML_NS,
    CharData,
    Comment,
    Directive,
    EndElement,
    ProcessingInstruction,
    QName,
    StartElement,
    XMLLiteralWriter,
    XMLTokenReader,
)

DOC = """<?xml version="1.0"?>
<!DOCTYPE root>
<root xmlns="http://ex/" xmlns:p="http://p/">
  <!-- note -->
  <p:child p:attr="1" plain="2" xml:lang="en">text</p:child>
  <?target some data?>
</root>
"""


def _significant(reader):
    return [t for t in reader if not (isinstance(t, CharData) and not t.text.strip())]


def test_token_sequence():
    tokens = _significant(XMLTokenReader(DOC))
    kinds = [type(t) for t in tokens]
    assert kinds == [
        Directive,
        StartElement,
        Comment,
        StartElement,
        CharData,
        EndElement,
        ProcessingInstruction,
        EndElement,
    ]
    root = tokens[1]
    assert root.name == QName("http://ex/", "root")
    assert ("", "http://ex/") in root.namespaces
    assert ("p", "http://p/") in root.namespaces

    child = tokens[3]
    assert child.name == QName("http://p/", "child", "p")
    assert child.name.iri == "http://p/child"
    assert child.name.qualified == "p:child"
    assert [(a.name, a.value) for a in child.attributes] == [
        (QName("http://p/", "attr", "p"), "1"),
        (QName("", "plain"), "2"),
        (QName(XML_NS, "lang", "xml"), "en"),
    ]
    assert tokens[2].text == " note "
    assert tokens[6].target == "target"
    assert tokens[6].data == "some data"


def test_positions_are_recorded():
    tokens = _significant(XMLTokenReader(DOC))
    child = tokens[3]
    assert child.line == 5
    assert child.column == 2


def test_element_path_tracks_open_elements():
    reader = XMLTokenReader('<a xmlns:x="http://x/"><x:b><c/></x:b></a>')
    paths = []
    for token in reader:
        if isinstance(token, StartElement):
            paths.append(reader.element_path)
    assert paths == ["/a", "/a/x:b", "/a/x:b/c"]
    assert reader.element_path == ""


def test_small_chunks_from_file_object():
    data = DOC.encode("utf-8")
    chunked = list(XMLTokenReader(io.BytesIO(data), chunk_size=3))
    whole = list(XMLTokenReader(data))

    def structure(tokens):
        return [type(t) for t in tokens if not isinstance(t, CharData)]

    def text(tokens):
        return "".join(t.text for t in tokens if isinstance(t, CharData))

    assert structure(chunked) == structure(whole)
    assert text(chunked) == text(whole)


def test_bytes_honour_declared_encoding():
    data = '<?xml version="1.0" encoding="ISO-8859-1"?><a>caf\xe9</a>'.encode("latin-1")
    text = "".join(t.text for t in XMLTokenReader(data) if isinstance(t, CharData))
    assert text == "café"


def test_malformed_xml_raises_xmlio_error():
    reader = XMLTokenReader("<a>\n<b></a>")
    with pytest.raises(XMLIOError) as excinfo:
        list(reader)
    assert excinfo.value.line == 2
    assert excinfo.value.kind == "XMLIO"


def test_unterminated_document_raises():
    with pytest.raises(XMLIOError):
        list(XMLTokenReader("<a><b>"))


def _literal(document):
    reader = XMLTokenReader(document)
    tokens = list(reader)
    writer = XMLLiteralWriter()
    for token in tokens[1:-1]:
        writer.write(token)
    return writer.getvalue()


def test_literal_writer_declares_used_namespaces():
    document = (
        '<r xmlns:ex="http://ex/" xmlns:unused="http://u/">'
        '<ex:a z="2" ex:y="1">x &amp; y &lt; z</ex:a><!--dropped--><?pi data?></r>'
    )
    assert _literal(document) == (
        '<ex:a xmlns:ex="http://ex/" z="2" ex:y="1">x &amp; y &lt; z</ex:a><?pi data?>'
    )


def test_literal_writer_default_namespace_and_empty_elements():
    document = '<r xmlns="http://ex/"><a><b/></a><c xmlns=""/></r>'
    assert _literal(document) == '<a xmlns="http://ex/"><b></b></a><c></c>'


def test_literal_writer_escapes_attribute_values():
    document = "<r><a v='say \"x\" &amp; &#9;tab'/></r>"
    assert _literal(document) == '<a v="say &quot;x&quot; &amp; &#x9;tab"></a>'
