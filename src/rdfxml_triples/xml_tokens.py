"""Pull-style XML token stream for the RDF/XML parser.

:class:`XMLTokenReader` drives the expat parser that also backs
``xml.etree.ElementTree``, but instead of building a tree it queues one token
per parser callback:

        * :class:`StartElement` - qualified name, attributes in declaration order
          and the namespace declarations made on the element
        * :class:`EndElement`
        * :class:`CharData` - adjacent text may arrive split over several tokens
        * :class:`Comment`, :class:`ProcessingInstruction`, :class:`Directive`

Every token records the line and column reported by expat. Input is fed to
expat lazily in ``chunk_size`` pieces, so a reader over a file object never
holds the whole document in memory.

:class:`XMLLiteralWriter` turns the tokens of an element's content back into
text for ``rdf:parseType="Literal"``. Output follows exclusive XML
canonicalization without comments: original prefixes are kept, namespace
declarations appear on the outermost element that uses them, attributes are
sorted and empty elements are written as start/end pairs.

Example:
        reader = XMLTokenReader('<a xmlns="http://ex/"><b>hi</b></a>')
        for token in reader:
            print(type(token).__name__, token)
"""

from __future__ import annotations

import io
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import IO, Deque, Dict, Iterator, List, Optional, Tuple, Union
from xml.parsers import expat

from .errors import XMLIOError

logger = logging.getLogger(__name__)

XML_NS = "http://www.w3.org/XML/1998/namespace"

Source = Union[str, bytes, IO[bytes]]


@dataclass(frozen=True)
class QName:
    """Expanded XML name plus the prefix it was written with."""

    namespace: str
    local: str
    prefix: str = ""

    @property
    def iri(self) -> str:
        """Concatenation of namespace and local name, as RDF/XML maps names to IRIs."""
        return self.namespace + self.local

    @property
    def qualified(self) -> str:
        return f"{self.prefix}:{self.local}" if self.prefix else self.local


@dataclass(frozen=True)
class Attribute:
    name: QName
    value: str


@dataclass
class StartElement:
    name: QName
    attributes: List[Attribute] = field(default_factory=list)
    namespaces: List[Tuple[str, str]] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass
class EndElement:
    name: QName
    line: int = 0
    column: int = 0


@dataclass
class CharData:
    text: str
    line: int = 0
    column: int = 0


@dataclass
class Comment:
    text: str
    line: int = 0
    column: int = 0


@dataclass
class ProcessingInstruction:
    target: str
    data: str
    line: int = 0
    column: int = 0


@dataclass
class Directive:
    """A document type declaration; only the root name is kept."""

    text: str
    line: int = 0
    column: int = 0


Token = Union[StartElement, EndElement, CharData, Comment, ProcessingInstruction, Directive]


def _split_name(name: str) -> QName:
    parts = name.split(" ")
    if len(parts) == 3:
        return QName(parts[0], parts[1], parts[2])
    if len(parts) == 2:
        return QName(parts[0], parts[1])
    return QName("", name)


class XMLTokenReader:
    """Iterate over the tokens of an XML document.

    Args:
        source: Document text, encoded bytes, or a binary file object. Text is
            fed to expat as UTF-8 and any encoding declaration is ignored;
            bytes honour the document's own declaration.
        chunk_size: Number of bytes handed to expat per read.

    Raises:
        XMLIOError: From :meth:`next_token` when the input is not well-formed
            XML or reading the file object fails.
    """

    def __init__(self, source: Source, chunk_size: int = 65536) -> None:
        encoding: Optional[str] = None
        if isinstance(source, str):
            source = source.encode("utf-8")
            encoding = "utf-8"
        if isinstance(source, (bytes, bytearray)):
            self._stream: IO[bytes] = io.BytesIO(bytes(source))
        else:
            self._stream = source
        self.chunk_size = chunk_size
        self._pending: Deque[Token] = deque()
        self._finished = False
        self._declared: List[Tuple[str, str]] = []
        self._open: List[QName] = []
        self.line = 0
        self.column = 0

        parser = expat.ParserCreate(encoding, namespace_separator=" ")
        parser.namespace_prefixes = True
        parser.ordered_attributes = True
        parser.buffer_text = True
        parser.StartElementHandler = self._on_start
        parser.EndElementHandler = self._on_end
        parser.CharacterDataHandler = self._on_text
        parser.CommentHandler = self._on_comment
        parser.ProcessingInstructionHandler = self._on_pi
        parser.StartDoctypeDeclHandler = self._on_doctype
        parser.StartNamespaceDeclHandler = self._on_namespace
        self._parser = parser

    # ---------------- expat callbacks ---------------- #

    def _where(self) -> Tuple[int, int]:
        return self._parser.CurrentLineNumber, self._parser.CurrentColumnNumber

    def _on_namespace(self, prefix: Optional[str], uri: Optional[str]) -> None:
        self._declared.append((prefix or "", uri or ""))

    def _on_start(self, name: str, attrs: List[str]) -> None:
        line, column = self._where()
        attributes = [
            Attribute(_split_name(attrs[i]), attrs[i + 1]) for i in range(0, len(attrs), 2)
        ]
        self._pending.append(
            StartElement(_split_name(name), attributes, self._declared, line, column)
        )
        self._declared = []

    def _on_end(self, name: str) -> None:
        line, column = self._where()
        self._pending.append(EndElement(_split_name(name), line, column))

    def _on_text(self, data: str) -> None:
        line, column = self._where()
        self._pending.append(CharData(data, line, column))

    def _on_comment(self, data: str) -> None:
        line, column = self._where()
        self._pending.append(Comment(data, line, column))

    def _on_pi(self, target: str, data: str) -> None:
        line, column = self._where()
        self._pending.append(ProcessingInstruction(target, data, line, column))

    def _on_doctype(self, name: str, *_ignored) -> None:
        line, column = self._where()
        self._pending.append(Directive(f"DOCTYPE {name}", line, column))

    # ---------------- pull interface ---------------- #

    def _feed(self) -> None:
        try:
            chunk = self._stream.read(self.chunk_size)
        except OSError as err:
            raise XMLIOError(f"error reading XML input: {err}") from err
        try:
            if chunk:
                self._parser.Parse(chunk, False)
            else:
                self._parser.Parse(b"", True)
                self._finished = True
        except expat.ExpatError as err:
            raise XMLIOError(
                f"malformed XML: {expat.ErrorString(err.code)}",
                line=err.lineno,
                column=err.offset,
            ) from err

    def next_token(self) -> Optional[Token]:
        """Return the next token, or ``None`` once the document is exhausted."""
        while not self._pending:
            if self._finished:
                return None
            self._feed()
        token = self._pending.popleft()
        self.line, self.column = token.line, token.column
        if isinstance(token, StartElement):
            self._open.append(token.name)
        elif isinstance(token, EndElement) and self._open:
            self._open.pop()
        return token

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            if token is None:
                return
            yield token

    @property
    def element_path(self) -> str:
        """Slash separated qualified names of the currently open elements."""
        return "/" + "/".join(name.qualified for name in self._open) if self._open else ""


def _escape_text(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("\r", "&#xD;")
    )


def _escape_attribute(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace('"', "&quot;")
        .replace("\t", "&#x9;")
        .replace("\n", "&#xA;")
        .replace("\r", "&#xD;")
    )


class XMLLiteralWriter:
    """Serialize element content tokens in exclusive canonical form.

    Feed every token between a property element's start and end tags to
    :meth:`write`, then read :meth:`getvalue`.

    Example:
        writer = XMLLiteralWriter()
        for token in content_tokens:
            writer.write(token)
        literal_text = writer.getvalue()
    """

    def __init__(self) -> None:
        self._out: List[str] = []
        # Namespace declarations already rendered, one mapping per open element.
        self._scopes: List[Dict[str, str]] = [{"": ""}]

    def write(self, token: Token) -> None:
        if isinstance(token, StartElement):
            self._start(token)
        elif isinstance(token, EndElement):
            self._scopes.pop()
            self._out.append(f"</{token.name.qualified}>")
        elif isinstance(token, CharData):
            self._out.append(_escape_text(token.text))
        elif isinstance(token, ProcessingInstruction):
            data = f" {token.data}" if token.data else ""
            self._out.append(f"<?{token.target}{data}?>")

    def _start(self, token: StartElement) -> None:
        rendered = self._scopes[-1]
        needed: Dict[str, str] = {token.name.prefix: token.name.namespace}
        for attr in token.attributes:
            if attr.name.prefix and attr.name.namespace != XML_NS:
                needed[attr.name.prefix] = attr.name.namespace
        declarations = []
        scope = dict(rendered)
        for prefix in sorted(needed):
            uri = needed[prefix]
            if rendered.get(prefix, None if prefix else "") == uri:
                continue
            scope[prefix] = uri
            name = f"xmlns:{prefix}" if prefix else "xmlns"
            declarations.append(f' {name}="{_escape_attribute(uri)}"')
        self._scopes.append(scope)

        attributes = sorted(
            token.attributes, key=lambda a: (a.name.namespace, a.name.local)
        )
        rendered_attrs = [
            f' {a.name.qualified}="{_escape_attribute(a.value)}"' for a in attributes
        ]
        self._out.append(f"<{token.name.qualified}{''.join(declarations)}{''.join(rendered_attrs)}>")

    def getvalue(self) -> str:
        return "".join(self._out)
