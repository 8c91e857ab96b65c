"""Core RDF term and triple values.

These immutable dataclasses are produced by the N-Triples lexer and the
RDF/XML parser and consumed by sinks, the graph comparison helpers and the
HTTP layer. They carry no parser state and can be freely shared, hashed and
copied.

Overview:
        * ``IRI`` (re-exported from :mod:`rdfxml_triples.iri`) names resources.
        * ``BlankNodeID`` is a document-local node label.
        * ``Literal`` pairs a lexical form with a datatype IRI and, for
          ``rdf:langString``, a language tag.
        * ``Subject`` is ``IRI | BlankNodeID``; ``Object`` additionally allows
          ``Literal``. Code dispatches on the concrete class; there is no
          shared base type.
        * ``Triple`` is an ordered (subject, predicate, object).

Typical construction::

        from rdfxml_triples.models import IRI, Literal, Triple, BlankNodeID

        t = Triple(
                IRI("http://ex/a"),
                IRI("http://ex/p"),
                Literal.plain("hi"),
        )
        str(t)  # '<http://ex/a> <http://ex/p> "hi" .'

Printing follows the canonical N-Triples form: literals escape ``\\``, ``"``,
newline, carriage return and tab and leave every other character verbatim;
``xsd:string`` literals are written without a datatype suffix.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from .errors import InvalidBlankNodeError
from .iri import IRI

RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
XSD_NS = "http://www.w3.org/2001/XMLSchema#"

RDF_TYPE = IRI(RDF_NS + "type")
RDF_LANG_STRING = IRI(RDF_NS + "langString")
RDF_XML_LITERAL = IRI(RDF_NS + "XMLLiteral")
RDF_SUBJECT = IRI(RDF_NS + "subject")
RDF_PREDICATE = IRI(RDF_NS + "predicate")
RDF_OBJECT = IRI(RDF_NS + "object")
RDF_STATEMENT = IRI(RDF_NS + "Statement")
RDF_FIRST = IRI(RDF_NS + "first")
RDF_REST = IRI(RDF_NS + "rest")
RDF_NIL = IRI(RDF_NS + "nil")
XSD_STRING = IRI(XSD_NS + "string")

_PN_CHARS_BASE = (
    "A-Za-z\u00C0-\u00D6\u00D8-\u00F6\u00F8-\u02FF\u0370-\u037D\u037F-\u1FFF"
    "\u200C-\u200D\u2070-\u218F\u2C00-\u2FEF\u3001-\uD7FF\uF900-\uFDCF"
    "\uFDF0-\uFFFD\U00010000-\U000EFFFF"
)
_PN_CHARS_U = _PN_CHARS_BASE + "_:"
_PN_CHARS = _PN_CHARS_U + "\\-0-9\u00B7\u0300-\u036F\u203F-\u2040"

# BLANK_NODE_LABEL without the leading "_:".
BLANK_NODE_LABEL = f"[{_PN_CHARS_U}0-9](?:[{_PN_CHARS}.]*[{_PN_CHARS}])?"
blank_node_label_re = re.compile(f"^{BLANK_NODE_LABEL}$")

_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def escape_string(value: str) -> str:
    """Escape ``value`` for use inside an N-Triples string literal."""
    return "".join(_STRING_ESCAPES.get(char, char) for char in value)


def check_blank_node_label(label: str) -> None:
    """Raise :class:`InvalidBlankNodeError` unless ``label`` is a valid label."""
    if not blank_node_label_re.match(label):
        raise InvalidBlankNodeError(
            f"invalid blank node label {label!r}: does not match BLANK_NODE_LABEL"
        )


@dataclass(frozen=True)
class BlankNodeID:
    """A blank node label, without the ``_:`` prefix."""

    label: str

    def __str__(self) -> str:
        return self.label

    def to_ntriples(self) -> str:
        return f"_:{self.label}"


@dataclass(frozen=True)
class Literal:
    """An RDF literal.

    Attributes:
        lexical_form: Unicode lexical form.
        datatype: Datatype IRI; ``rdf:langString`` whenever ``language`` is set.
        language: Language tag, empty for non language-tagged literals.

    Example:
        >>> Literal.plain("chat", "fr").datatype == RDF_LANG_STRING
        True
        >>> Literal.plain("x").datatype == XSD_STRING
        True
    """

    lexical_form: str
    datatype: IRI = XSD_STRING
    language: str = ""

    def __post_init__(self) -> None:
        if self.language and self.datatype != RDF_LANG_STRING:
            raise ValueError(
                f"literal with language tag {self.language!r} must have datatype "
                f"{RDF_LANG_STRING.value}, got {self.datatype.value}"
            )

    @classmethod
    def plain(cls, lexical_form: str, language: str = "") -> "Literal":
        """Return an ``xsd:string`` literal, or ``rdf:langString`` when ``language`` is set."""
        if language:
            return cls(lexical_form, RDF_LANG_STRING, language)
        return cls(lexical_form, XSD_STRING, "")

    @classmethod
    def typed(cls, lexical_form: str, datatype: IRI) -> "Literal":
        return cls(lexical_form, datatype, "")

    def to_ntriples(self) -> str:
        quoted = f'"{escape_string(self.lexical_form)}"'
        if self.language:
            return f"{quoted}@{self.language}"
        if self.datatype != XSD_STRING:
            return f"{quoted}^^{self.datatype.to_ntriples()}"
        return quoted


Subject = Union[IRI, BlankNodeID]
Object = Union[IRI, BlankNodeID, Literal]

_SUBJECT_TYPES = (IRI, BlankNodeID)
_OBJECT_TYPES = (IRI, BlankNodeID, Literal)


@dataclass(frozen=True)
class Triple:
    """An RDF triple; ``str(triple)`` is its N-Triples line."""

    subject: Subject
    predicate: IRI
    object: Object

    def __post_init__(self) -> None:
        if not isinstance(self.subject, _SUBJECT_TYPES):
            raise TypeError(f"triple subject must be IRI or BlankNodeID, got {self.subject!r}")
        if not isinstance(self.predicate, IRI):
            raise TypeError(f"triple predicate must be IRI, got {self.predicate!r}")
        if not isinstance(self.object, _OBJECT_TYPES):
            raise TypeError(
                f"triple object must be IRI, BlankNodeID or Literal, got {self.object!r}"
            )

    def __str__(self) -> str:
        return (
            f"{self.subject.to_ntriples()} {self.predicate.to_ntriples()} "
            f"{self.object.to_ntriples()} ."
        )


def iris_equal(a: IRI, b: IRI) -> bool:
    return a.value == b.value


def literals_equal(a: Literal, b: Literal) -> bool:
    """Compare lexical form, datatype and language tag verbatim."""
    return (
        a.lexical_form == b.lexical_form
        and iris_equal(a.datatype, b.datatype)
        and a.language == b.language
    )


def subjects_equal(a: Subject, b: Subject) -> bool:
    if isinstance(a, IRI) and isinstance(b, IRI):
        return iris_equal(a, b)
    if isinstance(a, BlankNodeID) and isinstance(b, BlankNodeID):
        return a.label == b.label
    return False


def objects_equal(a: Object, b: Object) -> bool:
    if isinstance(a, Literal) and isinstance(b, Literal):
        return literals_equal(a, b)
    if isinstance(a, Literal) or isinstance(b, Literal):
        return False
    return subjects_equal(a, b)


def triples_equal(a: Triple, b: Triple) -> bool:
    return (
        subjects_equal(a.subject, b.subject)
        and iris_equal(a.predicate, b.predicate)
        and objects_equal(a.object, b.object)
    )
