"""Internationalized Resource Identifiers (RFC 3987).

This module parses, validates, resolves, and normalizes IRIs. It is pure and
reentrant: every function takes and returns plain values.

Components:
        * :class:`IRIParts` - the five RFC 3986 components of an IRI reference.
          ``None`` marks an absent component and ``""`` a present but empty one,
          so ``http:///x`` (empty authority) and ``http://x#`` (empty fragment)
          survive a split/render round trip unchanged.
        * :class:`IRI` - an immutable IRI value with resolution helpers.
        * :func:`parse` - split, validate each component against the RFC 3987
          productions, then normalize percent encoding.
        * :func:`normalize_percent_encoding` - decode every run of percent
          escapes as UTF-8, unescape ``iunreserved`` characters and re-escape
          everything else with uppercase hex.
        * :func:`resolve_reference` - RFC 3986 section 5.2 reference resolution.

Typical usage:
        from rdfxml_triples.iri import IRI, parse

        base = parse("https://example.org/a/b#x")
        base.resolve_reference("#3")          # IRI('https://example.org/a/b#3')
        base.resolve_reference("../c?q=1")    # IRI('https://example.org/c?q=1')
        parse("http://x/dog%20house/%c2%B5")  # IRI('http://x/dog%20house/µ')

Notes:
* Unicode Normalization Form C is not applied.
* Host names are not case folded and IP literals are only checked for their
  character repertoire.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from .errors import InvalidIRIError

# RFC 3986 Appendix B.
_SPLIT_RE = re.compile(r"^(?:([^:/?#]+):)?(?://([^/?#]*))?([^?#]*)(?:\?([^#]*))?(?:#(.*))?$", re.S)
_AUTHORITY_RE = re.compile(r"^(?:([^@]*)@)?(\[[^\]]*\]|[^:]*)(?::([^:]*))?$", re.S)

_UCSCHAR = (
    "\u00A0-\uD7FF\uF900-\uFDCF\uFDF0-\uFFEF"
    "\U00010000-\U0001FFFD\U00020000-\U0002FFFD\U00030000-\U0003FFFD"
    "\U00040000-\U0004FFFD\U00050000-\U0005FFFD\U00060000-\U0006FFFD"
    "\U00070000-\U0007FFFD\U00080000-\U0008FFFD\U00090000-\U0009FFFD"
    "\U000A0000-\U000AFFFD\U000B0000-\U000BFFFD\U000C0000-\U000CFFFD"
    "\U000D0000-\U000DFFFD\U000E1000-\U000EFFFD"
)
_IPRIVATE = "\uE000-\uF8FF\U000F0000-\U000FFFFD\U00100000-\U0010FFFD"
_IUNRESERVED = "A-Za-z0-9\\-._~" + _UCSCHAR
_SUB_DELIMS = "!$&'()*+,;="
_PCT_ENCODED = "%[0-9A-Fa-f]{2}"
_IPCHAR = f"(?:[{_IUNRESERVED}{re.escape(_SUB_DELIMS)}:@]|{_PCT_ENCODED})"

iunreserved_re = re.compile(f"^[{_IUNRESERVED}]$")
scheme_re = re.compile(r"^[A-Za-z][A-Za-z0-9+\-.]*$")
iuserinfo_re = re.compile(f"^(?:[{_IUNRESERVED}{re.escape(_SUB_DELIMS)}:]|{_PCT_ENCODED})*$")
ireg_name_re = re.compile(f"^(?:[{_IUNRESERVED}{re.escape(_SUB_DELIMS)}]|{_PCT_ENCODED})*$")
ip_literal_re = re.compile(
    r"^\[(?:[0-9A-Fa-f:.]+|v[0-9A-Fa-f]+\.[A-Za-z0-9\-._~!$&'()*+,;=:]+)\]$"
)
port_re = re.compile(r"^[0-9]*$")
ipath_re = re.compile(f"^(?:{_IPCHAR}|/)*$")
iquery_re = re.compile(f"^(?:{_IPCHAR}|[{_IPRIVATE}/?])*$")
ifragment_re = re.compile(f"^(?:{_IPCHAR}|[/?])*$")

_PCT_RUN_RE = re.compile(r"(?:%[0-9A-Fa-f]{2})+")


@dataclass(frozen=True)
class IRIParts:
    """The components of an IRI reference.

    Attributes:
        scheme: Scheme without the trailing ``:`` or ``None``.
        userinfo: User information without the trailing ``@`` or ``None``.
        host: Host (possibly empty). Only meaningful when ``has_authority``.
        port: Port digits without the leading ``:`` or ``None``.
        has_authority: True when the reference contains ``//``, even if the
            authority that follows is empty.
        path: Path, possibly empty.
        query: Query without the leading ``?`` or ``None``.
        fragment: Fragment without the leading ``#`` or ``None``.
    """

    scheme: Optional[str] = None
    userinfo: Optional[str] = None
    host: str = ""
    port: Optional[str] = None
    has_authority: bool = False
    path: str = ""
    query: Optional[str] = None
    fragment: Optional[str] = None

    @property
    def authority(self) -> Optional[str]:
        if not self.has_authority:
            return None
        out = ""
        if self.userinfo is not None:
            out += self.userinfo + "@"
        out += self.host
        if self.port is not None:
            out += ":" + self.port
        return out

    def render(self) -> str:
        """Reassemble the components into an IRI reference string."""
        out = []
        if self.scheme is not None:
            out.append(self.scheme + ":")
        authority = self.authority
        if authority is not None:
            out.append("//" + authority)
        out.append(self.path)
        if self.query is not None:
            out.append("?" + self.query)
        if self.fragment is not None:
            out.append("#" + self.fragment)
        return "".join(out)


def split(value: str) -> IRIParts:
    """Split ``value`` into components without validating them.

    Raises:
        InvalidIRIError: If the authority cannot be separated into user
            information, host and port.
    """
    scheme, authority, path, query, fragment = _SPLIT_RE.match(value).groups()
    userinfo, host, port = None, "", None
    if authority is not None:
        auth_match = _AUTHORITY_RE.match(authority)
        if auth_match is None:
            raise InvalidIRIError(f"invalid authority {authority!r} in IRI {value!r}")
        userinfo, host, port = auth_match.groups()
    return IRIParts(
        scheme=scheme,
        userinfo=userinfo,
        host=host or "",
        port=port,
        has_authority=authority is not None,
        path=path,
        query=query,
        fragment=fragment,
    )


def validate(parts: IRIParts, original: str = "") -> None:
    """Check every component of ``parts`` against its RFC 3987 production.

    Raises:
        InvalidIRIError: Naming the first component that fails and its text.
    """
    label = original or parts.render()
    if parts.scheme is not None and not scheme_re.match(parts.scheme):
        raise InvalidIRIError(f"invalid scheme {parts.scheme!r} in IRI {label!r}")
    if parts.has_authority:
        if parts.userinfo is not None and not iuserinfo_re.match(parts.userinfo):
            raise InvalidIRIError(f"invalid user info {parts.userinfo!r} in IRI {label!r}")
        if parts.host.startswith("["):
            if not ip_literal_re.match(parts.host):
                raise InvalidIRIError(f"invalid IP literal {parts.host!r} in IRI {label!r}")
        elif not ireg_name_re.match(parts.host):
            raise InvalidIRIError(f"invalid host {parts.host!r} in IRI {label!r}")
        if parts.port is not None and not port_re.match(parts.port):
            raise InvalidIRIError(f"invalid port {parts.port!r} in IRI {label!r}")
    if not ipath_re.match(parts.path):
        raise InvalidIRIError(f"invalid path {parts.path!r} in IRI {label!r}")
    if parts.scheme is None and not parts.has_authority:
        first_segment = parts.path.split("/", 1)[0]
        if ":" in first_segment:
            raise InvalidIRIError(
                f"invalid path {parts.path!r} in IRI {label!r}: first segment of a relative path may not contain ':'"
            )
    if parts.query is not None and not iquery_re.match(parts.query):
        raise InvalidIRIError(f"invalid query {parts.query!r} in IRI {label!r}")
    if parts.fragment is not None and not ifragment_re.match(parts.fragment):
        raise InvalidIRIError(f"invalid fragment {parts.fragment!r} in IRI {label!r}")


def normalize_percent_encoding(value: str) -> str:
    """Normalize the percent escapes of ``value``.

    Each maximal run of ``%XX`` octets is decoded as UTF-8. Characters matching
    ``iunreserved`` are written out literally; all other characters are
    re-escaped using uppercase hex digits. The operation is idempotent.

    Raises:
        InvalidIRIError: If a run of escapes is not valid UTF-8.

    Example:
        >>> normalize_percent_encoding("http://x/dog%20house/%c2%B5")
        'http://x/dog%20house/µ'
    """

    def _replace(match: "re.Match[str]") -> str:
        run = match.group(0)
        octets = bytes(int(run[i + 1 : i + 3], 16) for i in range(0, len(run), 3))
        try:
            decoded = octets.decode("utf-8")
        except UnicodeDecodeError as err:
            raise InvalidIRIError(
                f"invalid percent encoding {run!r} in IRI {value!r}: {err.reason}"
            ) from None
        out = []
        for char in decoded:
            if iunreserved_re.match(char):
                out.append(char)
            else:
                out.append("".join(f"%{b:02X}" for b in char.encode("utf-8")))
        return "".join(out)

    return _PCT_RUN_RE.sub(_replace, value)


def remove_dot_segments(path: str) -> str:
    """Apply the RFC 3986 section 5.2.4 dot segment removal to ``path``."""
    input_buffer = path
    output = []
    while input_buffer:
        if input_buffer.startswith("../"):
            input_buffer = input_buffer[3:]
        elif input_buffer.startswith("./"):
            input_buffer = input_buffer[2:]
        elif input_buffer.startswith("/./"):
            input_buffer = input_buffer[2:]
        elif input_buffer == "/.":
            input_buffer = "/"
        elif input_buffer.startswith("/../"):
            input_buffer = input_buffer[3:]
            if output:
                output.pop()
        elif input_buffer == "/..":
            input_buffer = "/"
            if output:
                output.pop()
        elif input_buffer in (".", ".."):
            input_buffer = ""
        else:
            start = 1 if input_buffer.startswith("/") else 0
            end = input_buffer.find("/", start)
            if end == -1:
                end = len(input_buffer)
            output.append(input_buffer[:end])
            input_buffer = input_buffer[end:]
    return "".join(output)


def _merge_paths(base: IRIParts, ref_path: str) -> str:
    if base.has_authority and base.path == "":
        return "/" + ref_path
    slash = base.path.rfind("/")
    return base.path[: slash + 1] + ref_path


def resolve_parts(base: IRIParts, ref: IRIParts) -> IRIParts:
    """Resolve ``ref`` against ``base`` following RFC 3986 section 5.2.2."""
    if ref.scheme is not None:
        return IRIParts(
            scheme=ref.scheme,
            userinfo=ref.userinfo,
            host=ref.host,
            port=ref.port,
            has_authority=ref.has_authority,
            path=remove_dot_segments(ref.path),
            query=ref.query,
            fragment=ref.fragment,
        )
    if ref.has_authority:
        return IRIParts(
            scheme=base.scheme,
            userinfo=ref.userinfo,
            host=ref.host,
            port=ref.port,
            has_authority=True,
            path=remove_dot_segments(ref.path),
            query=ref.query,
            fragment=ref.fragment,
        )
    if ref.path == "":
        path = base.path
        query = ref.query if ref.query is not None else base.query
    else:
        if ref.path.startswith("/"):
            path = remove_dot_segments(ref.path)
        else:
            path = remove_dot_segments(_merge_paths(base, ref.path))
        query = ref.query
    return IRIParts(
        scheme=base.scheme,
        userinfo=base.userinfo,
        host=base.host,
        port=base.port,
        has_authority=base.has_authority,
        path=path,
        query=query,
        fragment=ref.fragment,
    )


@dataclass(frozen=True)
class IRI:
    """An IRI value.

    Instances compare by their string value. Construct validated instances
    with :func:`parse`; the constructor itself performs no checks so that
    already-validated strings (for example from an N-Triples file) are cheap
    to wrap.

    Example:
        >>> base = IRI("https://example.org/a/b#x")
        >>> base.resolve_reference("#3").value
        'https://example.org/a/b#3'
    """

    value: str

    def __str__(self) -> str:
        return self.value

    def to_ntriples(self) -> str:
        """Return the N-Triples form ``<value>``."""
        return f"<{self.value}>"

    def parts(self) -> IRIParts:
        return split(self.value)

    @property
    def is_absolute(self) -> bool:
        return self.parts().scheme is not None

    def check(self) -> None:
        """Raise :class:`InvalidIRIError` unless the value is a valid IRI reference."""
        parse(self.value)

    def without_fragment(self) -> "IRI":
        parts = self.parts()
        if parts.fragment is None:
            return self
        return IRI(
            IRIParts(
                scheme=parts.scheme,
                userinfo=parts.userinfo,
                host=parts.host,
                port=parts.port,
                has_authority=parts.has_authority,
                path=parts.path,
                query=parts.query,
            ).render()
        )

    def normalize_percent_encoding(self) -> "IRI":
        return IRI(normalize_percent_encoding(self.value))

    def resolve_reference(self, ref: Union["IRI", str]) -> "IRI":
        """Resolve ``ref`` against this IRI; see :func:`resolve_reference`."""
        return resolve_reference(self, ref)


def parse(value: str) -> IRI:
    """Parse and validate an IRI reference, normalizing its percent escapes.

    Args:
        value: Absolute IRI or relative reference.

    Returns:
        The normalized :class:`IRI`.

    Raises:
        InvalidIRIError: If any component violates RFC 3987 or a percent
            escape run does not decode as UTF-8.
    """
    parts = split(value)
    validate(parts, value)
    return IRI(normalize_percent_encoding(value))


def resolve_reference(base: Union[IRI, str], ref: Union[IRI, str]) -> IRI:
    """Resolve the reference ``ref`` against ``base``.

    Follows RFC 3986 section 5.2: a reference with a scheme replaces the base
    (after dot segment removal); one with an authority keeps only the base
    scheme; otherwise the base authority is kept and the path is either
    inherited (empty reference path) or merged. The fragment always comes
    from ``ref``, so ``""`` yields the base without its fragment and
    ``"#frag"`` replaces the base fragment.

    Raises:
        InvalidIRIError: If either input or the result is not a valid IRI, or
            ``base`` has no scheme.
    """
    base_value = base.value if isinstance(base, IRI) else base
    ref_value = ref.value if isinstance(ref, IRI) else ref
    base_parts = split(base_value)
    validate(base_parts, base_value)
    if base_parts.scheme is None:
        raise InvalidIRIError(f"base IRI {base_value!r} is not absolute")
    ref_parts = split(ref_value)
    validate(ref_parts, ref_value)
    resolved = resolve_parts(base_parts, ref_parts)
    validate(resolved)
    return IRI(normalize_percent_encoding(resolved.render()))
