"""RDF/XML to triples.

Implements the grammar of https://www.w3.org/TR/rdf-syntax-grammar/ as a
recursive descent over the pull tokens of
:class:`~rdfxml_triples.xml_tokens.XMLTokenReader`. Triples are handed to a
sink callback as soon as they are recognised; the parser keeps no reference
to them.

Recognised productions:
        * document: an ``rdf:RDF`` root holding node elements, or a single
          node element as the root
        * nodeElement with ``rdf:ID`` / ``rdf:nodeID`` / ``rdf:about`` and
          property attributes
        * propertyElt: resource, literal and empty property elements,
          ``rdf:parseType`` ``Literal``, ``Resource`` and ``Collection``,
          ``rdf:li`` numbering and ``rdf:ID`` reification

``xml:base`` and ``xml:lang`` are scoped to the element that carries them.

Example:
        from rdfxml_triples.rdfxml_parser import parse_rdfxml

        for triple in parse_rdfxml(open("doc.rdf", "rb"), base_url="http://ex/doc"):
            print(triple)

Streaming with early termination::

        def sink(triple):
            seen.append(triple)
            return IterationDecision.STOP if len(seen) == 10 else IterationDecision.CONTINUE

        RDFXMLParser(source).read_triples(sink)
"""

from __future__ import annotations

import enum
import itertools
import logging
import os
import re
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from typing import Callable, Dict, Iterator, List, Optional, Set, Tuple

from . import iri
from .blank_nodes import BlankNodeGenerator
from .errors import (
    AmbiguousSubjectError,
    BadParseTypeError,
    InvalidBlankNodeError,
    InvalidIRIError,
    RDFXMLError,
    SinkError,
    UnexpectedContentError,
    XMLIOError,
)
from .iri import IRI
from .models import (
    RDF_FIRST,
    RDF_NIL,
    RDF_NS,
    RDF_OBJECT,
    RDF_PREDICATE,
    RDF_REST,
    RDF_STATEMENT,
    RDF_SUBJECT,
    RDF_TYPE,
    RDF_XML_LITERAL,
    BlankNodeID,
    Literal,
    Object,
    Subject,
    Triple,
    check_blank_node_label,
)
from .xml_tokens import (
    XML_NS,
    Attribute,
    CharData,
    EndElement,
    QName,
    Source,
    StartElement,
    Token,
    XMLLiteralWriter,
    XMLTokenReader,
)

logger = logging.getLogger(__name__)

RDF_RDF = RDF_NS + "RDF"
RDF_DESCRIPTION = RDF_NS + "Description"
RDF_ID = RDF_NS + "ID"
RDF_ABOUT = RDF_NS + "about"
RDF_NODE_ID = RDF_NS + "nodeID"
RDF_RESOURCE = RDF_NS + "resource"
RDF_PARSE_TYPE = RDF_NS + "parseType"
RDF_DATATYPE = RDF_NS + "datatype"
RDF_LI = RDF_NS + "li"
RDF_TYPE_NAME = RDF_NS + "type"

DEPRECATED_TERMS = frozenset(RDF_NS + n for n in ("aboutEach", "aboutEachPrefix", "bagID"))
CORE_SYNTAX_TERMS = frozenset(
    {RDF_RDF, RDF_ID, RDF_ABOUT, RDF_PARSE_TYPE, RDF_RESOURCE, RDF_NODE_ID, RDF_DATATYPE}
)
FORBIDDEN_NODE_ELEMENT_NAMES = CORE_SYNTAX_TERMS | DEPRECATED_TERMS | {RDF_LI}
FORBIDDEN_PROPERTY_ELEMENT_NAMES = CORE_SYNTAX_TERMS | DEPRECATED_TERMS | {RDF_DESCRIPTION}

_NAME_START = (
    "A-Z_a-z\u00C0-\u00D6\u00D8-\u00F6\u00F8-\u02FF\u0370-\u037D\u037F-\u1FFF"
    "\u200C-\u200D\u2070-\u218F\u2C00-\u2FEF\u3001-\uD7FF\uF900-\uFDCF"
    "\uFDF0-\uFFFD\U00010000-\U000EFFFF"
)
_NAME_CHAR = _NAME_START + "\\-.0-9\u00B7\u0300-\u036F\u203F-\u2040"
nc_name_re = re.compile(f"^[{_NAME_START}][{_NAME_CHAR}]*$")


class IterationDecision(enum.Enum):
    """Returned by a sink to continue or end the parse."""

    CONTINUE = "continue"
    STOP = "stop"


Sink = Callable[[Triple], Optional[IterationDecision]]


@dataclass
class ParserOptions:
    """Settings for a single parse.

    Attributes:
        base_url: Document base IRI. Empty means no base: relative references
            are then an error unless ``xml:base`` supplies one.
        blank_node_prefix: Leading part of generated blank node labels.
        check_nc_names: Require ``rdf:ID`` and ``rdf:nodeID`` values to be
            XML NCNames.
        chunk_size: Bytes handed to the XML parser per read.
        max_depth: Deepest element nesting accepted before the parse fails
            with :class:`UnexpectedContentError`.
    """

    base_url: str = ""
    blank_node_prefix: str = "gen"
    check_nc_names: bool = True
    chunk_size: int = 65536
    max_depth: int = 200

    @classmethod
    def from_string(cls, value: str) -> "ParserOptions":
        """Build options from ``key=value`` pairs separated by commas.

        Example:
            >>> ParserOptions.from_string("blank_node_prefix=b,check_nc_names=false").blank_node_prefix
            'b'
        """
        options = cls()
        known = {f.name for f in fields(cls)}
        for item in filter(None, (part.strip() for part in value.split(","))):
            key, sep, raw = item.partition("=")
            key = key.strip()
            if not sep or key not in known:
                raise ValueError(f"invalid parser option {item!r}")
            raw = raw.strip()
            current = getattr(options, key)
            if isinstance(current, bool):
                setattr(options, key, raw.lower() in ("1", "true", "yes", "on"))
            elif isinstance(current, int):
                setattr(options, key, int(raw))
            else:
                setattr(options, key, raw)
        return options

    @classmethod
    def from_env(cls) -> "ParserOptions":
        """Create options from ``RDFXML_PARSER_CONFIG``."""
        return cls.from_string(os.getenv("RDFXML_PARSER_CONFIG", ""))


class _StopParsing(Exception):
    """Unwinds the recursive descent after the sink asked to stop."""


def _is_whitespace(text: str) -> bool:
    return not text.strip(" \t\r\n")


class RDFXMLParser:
    """Single-use RDF/XML parser.

    Owns its base IRI and language stacks, its blank node generator and the
    token reader; distinct instances share nothing and may run in parallel.

    Args:
        source: Document text, bytes or a binary file object.
        options: Parser settings; ``base_url`` is overridden by the keyword
            argument of the same name when given.
    """

    def __init__(
        self,
        source: Source,
        options: Optional[ParserOptions] = None,
        *,
        base_url: Optional[str] = None,
    ) -> None:
        self.options = options or ParserOptions()
        if base_url is not None:
            self.options = replace(self.options, base_url=base_url)
        self.reader = XMLTokenReader(source, chunk_size=self.options.chunk_size)
        self.blank_nodes = BlankNodeGenerator(self.options.blank_node_prefix)
        self.triple_count = 0
        base: Optional[IRI] = None
        if self.options.base_url:
            base = iri.parse(self.options.base_url)
            if not base.is_absolute:
                raise InvalidIRIError(f"base URL {self.options.base_url!r} is not absolute")
        self._base_stack: List[Optional[IRI]] = [base]
        self._lang_stack: List[str] = [""]
        self._ids: Set[str] = set()
        self._depth = 0
        self._sink: Optional[Sink] = None

    # ---------------- public API ---------------- #

    def read_triples(self, sink: Sink) -> None:
        """Parse the document, calling ``sink`` once per triple in document order.

        The sink may return :attr:`IterationDecision.STOP` to end the parse
        early; already delivered triples stay delivered.

        Raises:
            RDFXMLError: A subclass describing the first problem found, with
                line, column and element path filled in.
            SinkError: When ``sink`` raises; the original exception is the
                ``__cause__``.
        """
        if self._sink is not None:
            raise RuntimeError("parser is already running")
        self._sink = sink
        logger.debug(f"Parsing RDF/XML document (base {self.options.base_url or 'none'})")
        try:
            self._document()
        except _StopParsing:
            logger.debug(f"Sink stopped the parse after {self.triple_count} triples")
        except RDFXMLError as err:
            raise err.with_position(self.reader.line, self.reader.column, self.reader.element_path)
        finally:
            self._sink = None
        logger.debug(
            f"Parsed {self.triple_count} triples, {self.blank_nodes.counter} blank node labels generated"
        )

    def read_all_triples(self) -> List[Triple]:
        """Parse the whole document and return its triples."""
        triples: List[Triple] = []

        def collect(triple: Triple) -> IterationDecision:
            triples.append(triple)
            return IterationDecision.CONTINUE

        self.read_triples(collect)
        return triples

    # ---------------- helpers ---------------- #

    def _emit(self, subject: Subject, predicate: IRI, obj: Object) -> Triple:
        triple = Triple(subject, predicate, obj)
        try:
            decision = self._sink(triple)
        except Exception as err:
            raise SinkError(f"sink raised {type(err).__name__}: {err}") from err
        self.triple_count += 1
        if decision is IterationDecision.STOP:
            raise _StopParsing()
        return triple

    def _error(self, cls, message: str) -> RDFXMLError:
        return cls(
            message,
            line=self.reader.line,
            column=self.reader.column,
            element_path=self.reader.element_path,
        )

    def _next(self) -> Token:
        token = self.reader.next_token()
        if token is None:
            raise self._error(XMLIOError, "unexpected end of XML input")
        return token

    @property
    def base(self) -> Optional[IRI]:
        return self._base_stack[-1]

    @property
    def language(self) -> str:
        return self._lang_stack[-1]

    def resolve(self, value: str, attribute: str = "") -> IRI:
        """Resolve ``value`` against the current base and normalize it."""
        try:
            base = self.base
            if base is None:
                ref = iri.parse(value)
                if not ref.is_absolute:
                    raise InvalidIRIError(f"relative IRI {value!r} with no base IRI")
                # resolving an absolute reference only removes dot segments
                return iri.resolve_reference(ref, ref)
            return iri.resolve_reference(base, value)
        except InvalidIRIError as err:
            if attribute:
                raise self._error(InvalidIRIError, f"{attribute}: {err.message}") from err
            raise

    def _check_nc_name(self, value: str, attribute: str) -> None:
        if self.options.check_nc_names and not nc_name_re.match(value):
            raise self._error(
                UnexpectedContentError, f"{attribute} value {value!r} is not an XML NCName"
            )

    def _id_iri(self, value: str) -> IRI:
        self._check_nc_name(value, "rdf:ID")
        resolved = self.resolve(f"#{value}", "rdf:ID")
        if resolved.value in self._ids:
            raise self._error(UnexpectedContentError, f"duplicate rdf:ID {value!r}")
        self._ids.add(resolved.value)
        return resolved

    def _node_id(self, value: str) -> BlankNodeID:
        self._check_nc_name(value, "rdf:nodeID")
        try:
            check_blank_node_label(value)
        except InvalidBlankNodeError as err:
            raise self._error(InvalidBlankNodeError, f"rdf:nodeID: {err.message}") from err
        return BlankNodeID(self.blank_nodes.observe(value))

    def _element_iri(self, name: QName) -> IRI:
        if not name.namespace:
            raise self._error(UnexpectedContentError, f"element {name.local!r} has no namespace")
        return IRI(name.iri)

    @contextmanager
    def _element_scope(self, start: StartElement) -> Iterator[List[Attribute]]:
        """Push ``xml:base`` / ``xml:lang`` for ``start`` and yield its RDF attributes.

        The stacks are popped again however the ``with`` block is left.
        """
        if self._depth >= self.options.max_depth:
            raise self._error(
                UnexpectedContentError,
                f"elements nested deeper than {self.options.max_depth} levels",
            )
        base_value: Optional[str] = None
        lang_value: Optional[str] = None
        attributes: List[Attribute] = []
        for attr in start.attributes:
            name = attr.name
            if name.namespace == XML_NS:
                if name.local == "base":
                    base_value = attr.value
                elif name.local == "lang":
                    lang_value = attr.value
                continue
            if not name.namespace:
                if not name.local.lower().startswith("xml"):
                    logger.warning(f"Ignoring attribute {name.local!r} without namespace")
                continue
            if name.prefix.lower().startswith("xml"):
                continue
            attributes.append(attr)

        pushed_base = pushed_lang = False
        self._depth += 1
        try:
            if base_value is not None:
                self._base_stack.append(self.resolve(base_value, "xml:base"))
                pushed_base = True
            if lang_value is not None:
                self._lang_stack.append(lang_value)
                pushed_lang = True
            yield attributes
        finally:
            self._depth -= 1
            if pushed_lang:
                self._lang_stack.pop()
            if pushed_base:
                self._base_stack.pop()

    def _property_attribute_triple(self, subject: Subject, attr: Attribute) -> None:
        if attr.name.iri == RDF_TYPE_NAME:
            self._emit(subject, RDF_TYPE, self.resolve(attr.value, "rdf:type"))
        else:
            self._emit(subject, IRI(attr.name.iri), Literal.plain(attr.value, self.language))

    def _reject_reserved_attribute(self, attr: Attribute) -> None:
        name = attr.name.iri
        if name in DEPRECATED_TERMS:
            raise self._error(
                UnexpectedContentError, f"deprecated attribute {attr.name.qualified} is not allowed"
            )
        if name == RDF_LI:
            raise self._error(UnexpectedContentError, "rdf:li is not allowed as an attribute")

    def _reify(self, triple: Triple, statement: IRI) -> None:
        self._emit(statement, RDF_SUBJECT, triple.subject)
        self._emit(statement, RDF_PREDICATE, triple.predicate)
        self._emit(statement, RDF_OBJECT, triple.object)
        self._emit(statement, RDF_TYPE, RDF_STATEMENT)

    def _skip_to_end(self, what: str) -> None:
        """Consume whitespace and comments up to the current element's end tag."""
        while True:
            token = self._next()
            if isinstance(token, EndElement):
                return
            if isinstance(token, StartElement):
                raise self._error(
                    UnexpectedContentError,
                    f"unexpected element {token.name.qualified} after {what}",
                )
            if isinstance(token, CharData) and not _is_whitespace(token.text):
                raise self._error(
                    UnexpectedContentError, f"unexpected text {token.text.strip()!r} after {what}"
                )

    # ---------------- grammar ---------------- #

    def _document(self) -> None:
        root: Optional[StartElement] = None
        while root is None:
            token = self.reader.next_token()
            if token is None:
                raise self._error(XMLIOError, "document has no root element")
            if isinstance(token, StartElement):
                root = token
            elif isinstance(token, CharData) and not _is_whitespace(token.text):
                raise self._error(UnexpectedContentError, "text before the root element")

        if root.name.iri == RDF_RDF:
            logger.debug("Document root is rdf:RDF")
            with self._element_scope(root):
                self._node_element_list()
        else:
            logger.debug(f"Document root {root.name.qualified} parsed as a node element")
            self._node_element(root)

        while self.reader.next_token() is not None:
            pass

    def _node_element_list(self) -> None:
        while True:
            token = self._next()
            if isinstance(token, StartElement):
                self._node_element(token)
            elif isinstance(token, EndElement):
                return
            elif isinstance(token, CharData) and not _is_whitespace(token.text):
                raise self._error(
                    UnexpectedContentError,
                    f"unexpected text {token.text.strip()!r} between node elements",
                )

    def _node_element(self, start: StartElement) -> Subject:
        if start.name.iri in FORBIDDEN_NODE_ELEMENT_NAMES:
            raise self._error(
                UnexpectedContentError, f"{start.name.qualified} is not allowed as a node element"
            )
        element_iri = self._element_iri(start.name)
        with self._element_scope(start) as attributes:
            subject: Optional[Subject] = None
            for attr in attributes:
                name = attr.name.iri
                if name not in (RDF_ID, RDF_NODE_ID, RDF_ABOUT):
                    continue
                if subject is not None:
                    raise self._error(
                        AmbiguousSubjectError,
                        "node element may carry only one of rdf:ID, rdf:nodeID and rdf:about",
                    )
                if name == RDF_ID:
                    subject = self._id_iri(attr.value)
                elif name == RDF_NODE_ID:
                    subject = self._node_id(attr.value)
                else:
                    subject = self.resolve(attr.value, "rdf:about")
            if subject is None:
                subject = self.blank_nodes.generate()

            if element_iri.value != RDF_DESCRIPTION:
                self._emit(subject, RDF_TYPE, element_iri)

            for attr in attributes:
                name = attr.name.iri
                if name in (RDF_ID, RDF_NODE_ID, RDF_ABOUT):
                    continue
                self._reject_reserved_attribute(attr)
                if name in CORE_SYNTAX_TERMS:
                    raise self._error(
                        UnexpectedContentError,
                        f"{attr.name.qualified} is not allowed on a node element",
                    )
                self._property_attribute_triple(subject, attr)

            self._property_elements(subject)
        return subject

    def _property_elements(self, subject: Subject) -> None:
        li_numbers = itertools.count(1)
        while True:
            token = self._next()
            if isinstance(token, StartElement):
                self._property_element(token, subject, li_numbers)
            elif isinstance(token, EndElement):
                return
            elif isinstance(token, CharData) and not _is_whitespace(token.text):
                raise self._error(
                    UnexpectedContentError,
                    f"unexpected text {token.text.strip()!r} between property elements",
                )

    def _property_element(
        self, start: StartElement, subject: Subject, li_numbers: Iterator[int]
    ) -> None:
        if start.name.iri in FORBIDDEN_PROPERTY_ELEMENT_NAMES:
            raise self._error(
                UnexpectedContentError,
                f"{start.name.qualified} is not allowed as a property element",
            )
        predicate = self._element_iri(start.name)
        if predicate.value == RDF_LI:
            predicate = IRI(f"{RDF_NS}_{next(li_numbers)}")

        with self._element_scope(start) as attributes:
            by_name: Dict[str, str] = {}
            for attr in attributes:
                self._reject_reserved_attribute(attr)
                by_name[attr.name.iri] = attr.value
            statement = by_name.get(RDF_ID)
            reification = self._id_iri(statement) if statement is not None else None

            parse_type = by_name.get(RDF_PARSE_TYPE)
            if parse_type is not None:
                extra = [
                    a.name.qualified
                    for a in attributes
                    if a.name.iri not in (RDF_ID, RDF_PARSE_TYPE)
                ]
                if extra:
                    raise self._error(
                        BadParseTypeError,
                        f"rdf:parseType={parse_type!r} does not allow {', '.join(extra)}",
                    )
                if parse_type == "Resource":
                    triple = self._parse_type_resource(subject, predicate, reification)
                elif parse_type == "Collection":
                    triple = self._parse_type_collection(subject, predicate, reification)
                else:
                    if parse_type != "Literal":
                        logger.warning(f"Unknown rdf:parseType {parse_type!r} treated as Literal")
                    triple = self._emit(
                        subject, predicate, Literal.typed(self._xml_literal(), RDF_XML_LITERAL)
                    )
                    if reification is not None:
                        self._reify(triple, reification)
                return

            text: List[str] = []
            while True:
                token = self._next()
                if isinstance(token, StartElement):
                    if not _is_whitespace("".join(text)):
                        raise self._error(
                            UnexpectedContentError,
                            f"text and element content mixed in {start.name.qualified}",
                        )
                    self._resource_property_element(
                        token, attributes, subject, predicate, reification
                    )
                    return
                if isinstance(token, EndElement):
                    break
                if isinstance(token, CharData):
                    text.append(token.text)

            value = "".join(text)
            if value or RDF_DATATYPE in by_name:
                self._literal_property_element(value, attributes, subject, predicate, reification)
            else:
                self._empty_property_element(attributes, subject, predicate, reification)

    def _resource_property_element(
        self,
        child: StartElement,
        attributes: List[Attribute],
        subject: Subject,
        predicate: IRI,
        reification: Optional[IRI],
    ) -> None:
        for attr in attributes:
            if attr.name.iri != RDF_ID:
                raise self._error(
                    UnexpectedContentError,
                    f"{attr.name.qualified} is not allowed on a property element with element content",
                )
        obj = self._node_element(child)
        self._skip_to_end("the object node element")
        triple = self._emit(subject, predicate, obj)
        if reification is not None:
            self._reify(triple, reification)

    def _literal_property_element(
        self,
        text: str,
        attributes: List[Attribute],
        subject: Subject,
        predicate: IRI,
        reification: Optional[IRI],
    ) -> None:
        datatype: Optional[IRI] = None
        for attr in attributes:
            if attr.name.iri == RDF_DATATYPE:
                datatype = self.resolve(attr.value, "rdf:datatype")
            elif attr.name.iri != RDF_ID:
                raise self._error(
                    UnexpectedContentError,
                    f"{attr.name.qualified} is not allowed on a property element with text content",
                )
        if datatype is not None:
            obj = Literal.typed(text, datatype)
        else:
            obj = Literal.plain(text, self.language)
        triple = self._emit(subject, predicate, obj)
        if reification is not None:
            self._reify(triple, reification)

    def _empty_property_element(
        self,
        attributes: List[Attribute],
        subject: Subject,
        predicate: IRI,
        reification: Optional[IRI],
    ) -> None:
        others = [a for a in attributes if a.name.iri != RDF_ID]
        if not others:
            triple = self._emit(subject, predicate, Literal.plain("", self.language))
            if reification is not None:
                self._reify(triple, reification)
            return

        obj: Optional[Subject] = None
        for attr in others:
            if attr.name.iri == RDF_RESOURCE:
                if obj is not None:
                    raise self._error(
                        AmbiguousSubjectError, "rdf:resource and rdf:nodeID are mutually exclusive"
                    )
                obj = self.resolve(attr.value, "rdf:resource")
            elif attr.name.iri == RDF_NODE_ID:
                if obj is not None:
                    raise self._error(
                        AmbiguousSubjectError, "rdf:resource and rdf:nodeID are mutually exclusive"
                    )
                obj = self._node_id(attr.value)
        if obj is None:
            obj = self.blank_nodes.generate()

        for attr in others:
            name = attr.name.iri
            if name in (RDF_RESOURCE, RDF_NODE_ID):
                continue
            if name in CORE_SYNTAX_TERMS:
                raise self._error(
                    UnexpectedContentError,
                    f"{attr.name.qualified} is not allowed on an empty property element",
                )
            self._property_attribute_triple(obj, attr)

        triple = self._emit(subject, predicate, obj)
        if reification is not None:
            self._reify(triple, reification)

    def _parse_type_resource(
        self, subject: Subject, predicate: IRI, reification: Optional[IRI]
    ) -> Triple:
        node = self.blank_nodes.generate("resource")
        triple = self._emit(subject, predicate, node)
        if reification is not None:
            self._reify(triple, reification)
        self._property_elements(node)
        return triple

    def _parse_type_collection(
        self, subject: Subject, predicate: IRI, reification: Optional[IRI]
    ) -> Triple:
        members: List[Subject] = []
        while True:
            token = self._next()
            if isinstance(token, StartElement):
                members.append(self._node_element(token))
            elif isinstance(token, EndElement):
                break
            elif isinstance(token, CharData) and not _is_whitespace(token.text):
                raise self._error(
                    UnexpectedContentError,
                    f"unexpected text {token.text.strip()!r} in collection",
                )

        if not members:
            triple = self._emit(subject, predicate, RDF_NIL)
            if reification is not None:
                self._reify(triple, reification)
            return triple

        cells = [self.blank_nodes.generate("list") for _ in members]
        triple = self._emit(subject, predicate, cells[0])
        if reification is not None:
            self._reify(triple, reification)
        for i, (cell, member) in enumerate(zip(cells, members)):
            self._emit(cell, RDF_FIRST, member)
            self._emit(cell, RDF_REST, cells[i + 1] if i + 1 < len(cells) else RDF_NIL)
        return triple

    def _xml_literal(self) -> str:
        writer = XMLLiteralWriter()
        depth = 0
        while True:
            token = self._next()
            if isinstance(token, EndElement):
                if depth == 0:
                    return writer.getvalue()
                depth -= 1
            elif isinstance(token, StartElement):
                depth += 1
            writer.write(token)


def read_triples(
    source: Source,
    sink: Sink,
    base_url: str = "",
    options: Optional[ParserOptions] = None,
) -> int:
    """Parse ``source`` and feed every triple to ``sink``.

    Returns:
        The number of triples delivered.
    """
    parser = RDFXMLParser(source, options, base_url=base_url or None)
    parser.read_triples(sink)
    return parser.triple_count


def parse_rdfxml(
    source: Source, base_url: str = "", options: Optional[ParserOptions] = None
) -> List[Triple]:
    """Parse a whole RDF/XML document into a list of triples."""
    return RDFXMLParser(source, options, base_url=base_url or None).read_all_triples()


__all__: Tuple[str, ...] = (
    "IterationDecision",
    "ParserOptions",
    "RDFXMLParser",
    "Sink",
    "parse_rdfxml",
    "read_triples",
)
