"""RDF/XML Triples
=================

Streaming RDF/XML parser that turns documents into RDF triples, together with
the libraries it is built on and a small FastAPI service.

Key capabilities
----------------
- RFC 3987 IRI validation, RFC 3986 reference resolution and percent-encoding
  normalization (:mod:`~rdfxml_triples.iri`).
- Immutable term and triple values printed as N-Triples
  (:mod:`~rdfxml_triples.models`) and an N-Triples line lexer
  (:mod:`~rdfxml_triples.ntriples`).
- The W3C RDF/XML grammar driven over an expat token stream, delivering
  triples to a sink callback that can stop the parse
  (:mod:`~rdfxml_triples.rdfxml_parser`).
- Blank node independent graph comparison (:mod:`~rdfxml_triples.isomorphism`).
- TTL caching, metrics and HTTP endpoints for the service layer.

Minimal quick start
-------------------
>>> from rdfxml_triples import parse_rdfxml
>>> triples = parse_rdfxml(open("doc.rdf", "rb"), base_url="http://example.org/doc")
>>> print("\\n".join(str(t) for t in triples))

FastAPI application instance (for ASGI servers like uvicorn):
>>> from rdfxml_triples.app import app  # noqa: F401

Public surface
--------------
Only a curated subset is exported at the package level; other modules can be
imported explicitly.
"""

__version__ = "0.1.0"

from .cache import get_cached_parser
from .errors import RDFXMLError
from .iri import IRI
from .isomorphism import canonicalize, isomorphic
from .models import BlankNodeID, Literal, Triple
from .rdfxml_parser import (
    IterationDecision,
    ParserOptions,
    RDFXMLParser,
    parse_rdfxml,
    read_triples,
)

__all__ = [
    "IRI",
    "BlankNodeID",
    "IterationDecision",
    "Literal",
    "ParserOptions",
    "RDFXMLError",
    "RDFXMLParser",
    "Triple",
    "canonicalize",
    "get_cached_parser",
    "isomorphic",
    "parse_rdfxml",
    "read_triples",
]
