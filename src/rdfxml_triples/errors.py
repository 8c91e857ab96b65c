"""Exception hierarchy shared by the IRI, N-Triples and RDF/XML modules.

Every error raised while reading a document derives from :class:`RDFXMLError`
so callers can catch a single type, while the subclasses keep the failure
kinds apart:

        * ``InvalidIRIError`` - malformed IRI syntax or percent encoding
        * ``InvalidBlankNodeError`` - label violates ``BLANK_NODE_LABEL``
        * ``AmbiguousSubjectError`` - two identifying attributes on one element
        * ``BadParseTypeError`` - ``rdf:parseType`` used in a disallowed shape
        * ``UnexpectedContentError`` - content the grammar does not allow
        * ``XMLIOError`` - tokenizer failure or premature end of input
        * ``SinkError`` - the triple callback raised; the original exception is
          chained on ``__cause__``

Parser errors are annotated with the position reported by the XML tokenizer
and the path of open elements::

        try:
            parse_rdfxml(document, base_url="http://example.org/")
        except RDFXMLError as err:
            print(err.kind, err.line, err.column, err.element_path)
"""

from __future__ import annotations

from typing import Optional


class RDFXMLError(ValueError):
    """Base class for all errors raised by this package.

    Attributes:
        message: Human readable description without position information.
        line: 1-based line number in the XML input, when known.
        column: 0-based column number in the XML input, when known.
        element_path: Slash separated qualified names of the open elements.
    """

    kind = "RDFXMLError"

    def __init__(
        self,
        message: str,
        *,
        line: Optional[int] = None,
        column: Optional[int] = None,
        element_path: str = "",
    ) -> None:
        self.message = message
        self.line = line
        self.column = column
        self.element_path = element_path
        super().__init__(self._render())

    def _render(self) -> str:
        location = ""
        if self.line is not None:
            location = f"{self.line}:{self.column or 0}: "
        path = f" (at {self.element_path})" if self.element_path else ""
        return f"{location}{self.message}{path}"

    def with_position(
        self, line: Optional[int], column: Optional[int], element_path: str
    ) -> "RDFXMLError":
        """Fill in position details that are not already set and return ``self``."""
        if self.line is None:
            self.line = line
            self.column = column
        if not self.element_path:
            self.element_path = element_path
        self.args = (self._render(),)
        return self


class InvalidIRIError(RDFXMLError):
    kind = "InvalidIRI"


class InvalidBlankNodeError(RDFXMLError):
    kind = "InvalidBlankNode"


class AmbiguousSubjectError(RDFXMLError):
    kind = "AmbiguousSubject"


class BadParseTypeError(RDFXMLError):
    kind = "BadParseType"


class UnexpectedContentError(RDFXMLError):
    kind = "UnexpectedContent"


class XMLIOError(RDFXMLError):
    kind = "XMLIO"


class SinkError(RDFXMLError):
    """The triple sink raised an exception; see ``__cause__``."""

    kind = "SinkError"


class NTriplesSyntaxError(RDFXMLError):
    """An N-Triples line could not be parsed.

    ``line_number`` is the 1-based index of the offending line when the error
    comes from :func:`rdfxml_triples.ntriples.parse_lines`.
    """

    kind = "NTriplesSyntax"

    def __init__(self, message: str, *, line_number: Optional[int] = None) -> None:
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)
