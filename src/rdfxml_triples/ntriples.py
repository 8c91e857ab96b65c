"""N-Triples line lexer.

Parses one line of the W3C N-Triples format (https://www.w3.org/TR/n-triples/)
into a :class:`~rdfxml_triples.models.Triple` or a :class:`Comment`. Tokens are
scanned greedily from left to right: subject, predicate, object and the
terminating ``.``, separated by whitespace. A trailing ``# comment`` after the
``.`` is allowed.

String escapes (``ECHAR``) and numeric escapes (``UCHAR``) are decoded, so a
triple printed with ``str(triple)`` parses back to an equal triple.

Example:
        from rdfxml_triples.ntriples import parse_line, parse_lines

        triple = parse_line('<http://ex/a> <http://ex/p> "hi"@en .')
        triple.object.language  # 'en'

        triples = parse_lines(open("expected.nt", encoding="utf-8").read().splitlines())
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from .errors import InvalidBlankNodeError, NTriplesSyntaxError
from .iri import IRI
from .models import (
    BLANK_NODE_LABEL,
    RDF_LANG_STRING,
    XSD_STRING,
    BlankNodeID,
    Literal,
    Object,
    Subject,
    Triple,
)

_HEX = "[0-9A-Fa-f]"
_UCHAR = f"(?:\\\\u{_HEX}{{4}}|\\\\U{_HEX}{{8}})"
_ECHAR = r"(?:\\[tbnrf\"'\\])"

iriref_re = re.compile(f"<((?:[^\\x00-\\x20<>\"{{}}|^`\\\\]|{_UCHAR})*)>")
string_literal_quote_re = re.compile(f"\"((?:[^\\x22\\x5C\\x0A\\x0D]|{_ECHAR}|{_UCHAR})*)\"")
langtag_re = re.compile(r"@([a-zA-Z]+(?:-[a-zA-Z0-9]+)*)")
blank_node_re = re.compile(f"_:({BLANK_NODE_LABEL})")
_WHITESPACE_RE = re.compile(r"[ \t]*")

_ESCAPE_RE = re.compile(r"\\(?:u([0-9A-Fa-f]{4})|U([0-9A-Fa-f]{8})|([tbnrf\"'\\]))")
_ECHAR_VALUES = {
    "t": "\t",
    "b": "\b",
    "n": "\n",
    "r": "\r",
    "f": "\f",
    '"': '"',
    "'": "'",
    "\\": "\\",
}


@dataclass(frozen=True)
class Comment:
    """A comment line; ``contents`` excludes the leading ``#``."""

    contents: str

    def line(self) -> str:
        return f"#{self.contents}"


def unescape(value: str) -> str:
    """Decode ``ECHAR`` and ``UCHAR`` escape sequences."""

    def _replace(match: "re.Match[str]") -> str:
        short, long, echar = match.groups()
        if echar is not None:
            return _ECHAR_VALUES[echar]
        return chr(int(short or long, 16))

    return _ESCAPE_RE.sub(_replace, value)


class _Scanner:
    """Cursor over a single line."""

    def __init__(self, line: str) -> None:
        self.line = line
        self.pos = 0

    def skip_whitespace(self) -> None:
        self.pos = _WHITESPACE_RE.match(self.line, self.pos).end()

    def peek(self, prefix: str) -> bool:
        return self.line.startswith(prefix, self.pos)

    def at_end(self) -> bool:
        return self.pos >= len(self.line)

    def take(self, pattern: "re.Pattern[str]", what: str) -> "re.Match[str]":
        match = pattern.match(self.line, self.pos)
        if match is None:
            raise NTriplesSyntaxError(
                f"invalid {what} at column {self.pos + 1}: {self.line[self.pos:]!r}"
            )
        self.pos = match.end()
        return match

    def iri(self) -> IRI:
        return IRI(unescape(self.take(iriref_re, "IRIREF").group(1)))

    def blank_node(self) -> BlankNodeID:
        match = blank_node_re.match(self.line, self.pos)
        if match is None:
            raise InvalidBlankNodeError(
                f"invalid blank node at column {self.pos + 1}: {self.line[self.pos:]!r}"
            )
        self.pos = match.end()
        return BlankNodeID(match.group(1))

    def literal(self) -> Literal:
        lexical_form = unescape(self.take(string_literal_quote_re, "string literal").group(1))
        if self.peek("^^"):
            self.pos += 2
            return Literal.typed(lexical_form, self.iri())
        if self.peek("@"):
            language = self.take(langtag_re, "language tag").group(1)
            return Literal(lexical_form, RDF_LANG_STRING, language)
        return Literal(lexical_form, XSD_STRING, "")

    def subject(self) -> Subject:
        if self.peek("<"):
            return self.iri()
        if self.peek("_:"):
            return self.blank_node()
        raise NTriplesSyntaxError(f"invalid subject: {self.line[self.pos:]!r}")

    def object(self) -> Object:
        if self.peek("<"):
            return self.iri()
        if self.peek("_:"):
            return self.blank_node()
        if self.peek('"'):
            return self.literal()
        raise NTriplesSyntaxError(f"invalid object: {self.line[self.pos:]!r}")


def parse_line(line: str) -> Union[Triple, Comment]:
    """Parse a single N-Triples line.

    Args:
        line: One line without its terminating newline. A trailing ``\\r`` is
            ignored.

    Returns:
        A :class:`Triple`, or a :class:`Comment` when the line starts with ``#``.

    Raises:
        NTriplesSyntaxError: If the line is empty or malformed.
        InvalidBlankNodeError: If a blank node label is malformed.
    """
    if not line:
        raise NTriplesSyntaxError("invalid zero-length line")
    if line[0] == "#":
        return Comment(line[1:])
    scanner = _Scanner(line.rstrip("\r"))
    scanner.skip_whitespace()
    subject = scanner.subject()
    scanner.skip_whitespace()
    predicate = scanner.iri()
    scanner.skip_whitespace()
    obj = scanner.object()
    scanner.skip_whitespace()
    if not scanner.peek("."):
        raise NTriplesSyntaxError(f"last term must be '.', got {line[scanner.pos:]!r}")
    scanner.pos += 1
    scanner.skip_whitespace()
    if not scanner.at_end() and not scanner.peek("#"):
        raise NTriplesSyntaxError(f"trailing garbage after '.': {line[scanner.pos:]!r}")
    return Triple(subject, predicate, obj)


def parse_literal(text: str) -> Literal:
    """Parse a complete N-Triples literal such as ``"chat"@fr``."""
    scanner = _Scanner(text)
    literal = scanner.literal()
    if not scanner.at_end():
        raise NTriplesSyntaxError(f"invalid literal: {text!r}")
    return literal


def parse_lines(lines: Iterable[str]) -> List[Triple]:
    """Parse every line, returning the triples in order.

    Comment lines and lines containing only whitespace are skipped. Errors are
    re-raised as :class:`NTriplesSyntaxError` carrying the 1-based line number.
    """
    triples, _ = split_comments(lines)
    return triples


def parse_document(text: str) -> List[Triple]:
    """Parse a whole N-Triples document held in memory."""
    return parse_lines(text.splitlines())


def split_comments(lines: Iterable[str]) -> Tuple[List[Triple], List[Comment]]:
    """Like :func:`parse_lines` but also return the comments that were skipped."""
    triples: List[Triple] = []
    comments: List[Comment] = []
    for number, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            parsed = parse_line(line.lstrip(" \t"))
        except (NTriplesSyntaxError, InvalidBlankNodeError) as err:
            raise NTriplesSyntaxError(err.message, line_number=number) from err
        if isinstance(parsed, Comment):
            comments.append(parsed)
        else:
            triples.append(parsed)
    return triples, comments
