"""FastAPI application exposing the RDF/XML parser.

Quick start (run the server)::

    uvicorn rdfxml_triples.app:app --reload

Endpoints:

    GET  /health                Basic health probe
    POST /parse                 RDF/XML document to triples (+ ETag)
    POST /ntriples/validate     Check an N-Triples document line by line
    POST /iri/resolve           Resolve a reference against a base IRI
    POST /iri/normalize         Validate an IRI and normalize its percent escapes
    GET  /metrics/performance   Parse, cache and endpoint metrics
    GET  /metrics/cache         Cache analytics

Example: parse a document and revalidate it::

    curl -i -X POST http://localhost:8000/parse \
         -H "Content-Type: application/json" \
         -d '{"document": "<rdf:RDF xmlns:rdf=\\"http://www.w3.org/1999/02/22-rdf-syntax-ns#\\"/>",
              "base_url": "http://example.org/doc"}'
    # Repeat with -H 'If-None-Match: "<etag>"' to get 304 Not Modified.

Example: N-Triples output instead of JSON::

    curl -X POST http://localhost:8000/parse -H "Content-Type: application/json" \
         -d '{"document": "...", "format": "ntriples"}'

Error handling:
    * Any :class:`~rdfxml_triples.errors.RDFXMLError` becomes a 422 response
      ``{"error": <kind>, "detail": <message with position>}``.
"""

from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Any, Dict, List, Literal as LiteralType, Optional

from fastapi import Depends, FastAPI, Header, Request, Response
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import BaseModel, Field

from . import __version__
from . import iri as iri_module
from .cache import CachedRDFXMLParser, get_cached_parser
from .errors import RDFXMLError
from .models import BlankNodeID, Literal, Object, Triple
from .monitoring import get_monitor
from .ntriples import split_comments

logger = logging.getLogger(__name__)

app = FastAPI(
    title="RDF/XML Triples API",
    version=__version__,
    description="Parse RDF/XML documents into RDF triples, validate N-Triples and resolve IRIs",
    docs_url="/docs",
    redoc_url="/redoc",
)


@app.middleware("http")
async def monitor_requests(request: Request, call_next):
    """Record per-endpoint latency and status in the monitor."""
    start_time = time.time()
    response = await call_next(request)
    response_time = time.time() - start_time

    endpoint = f"{request.method} {request.url.path}"
    get_monitor().record_endpoint_request(endpoint, response_time, response.status_code)

    response.headers["X-Response-Time"] = f"{response_time:.3f}s"
    response.headers["X-API-Version"] = __version__
    return response


class ParseRequest(BaseModel):
    """Request model for the parse endpoint."""

    document: str = Field(..., description="RDF/XML document text")
    base_url: Optional[str] = Field(
        None, description="Document base IRI; defaults to the configured parser base"
    )
    format: LiteralType["json", "ntriples"] = Field(
        "json", description="json for structured triples, ntriples for a text/plain body"
    )


class TermModel(BaseModel):
    type: LiteralType["iri", "bnode", "literal"]
    value: str
    datatype: Optional[str] = None
    language: Optional[str] = None


class TripleModel(BaseModel):
    subject: TermModel
    predicate: str
    object: TermModel


class ParseResponse(BaseModel):
    """Response model for the parse endpoint."""

    triples: List[TripleModel] = Field(default_factory=list)
    count: int = Field(..., description="Number of triples")
    ntriples: str = Field(..., description="The triples as an N-Triples document")


class NTriplesRequest(BaseModel):
    text: str = Field(..., description="N-Triples document")


class NTriplesResponse(BaseModel):
    valid: bool
    count: int = 0
    comments: int = 0
    error: Optional[str] = None
    line_number: Optional[int] = None


class ResolveRequest(BaseModel):
    base: str = Field(..., description="Absolute base IRI")
    reference: str = Field(..., description="IRI reference to resolve")


class NormalizeRequest(BaseModel):
    iri: str = Field(..., description="IRI reference")


class IRIResponse(BaseModel):
    iri: str
    absolute: bool


def _term(term: Object) -> TermModel:
    if isinstance(term, BlankNodeID):
        return TermModel(type="bnode", value=term.label)
    if isinstance(term, Literal):
        return TermModel(
            type="literal",
            value=term.lexical_form,
            datatype=term.datatype.value,
            language=term.language or None,
        )
    return TermModel(type="iri", value=term.value)


def _triple(triple: Triple) -> TripleModel:
    return TripleModel(
        subject=_term(triple.subject),
        predicate=triple.predicate.value,
        object=_term(triple.object),
    )


@lru_cache(maxsize=1)
def get_parser() -> CachedRDFXMLParser:
    return get_cached_parser()


@app.exception_handler(RDFXMLError)
async def rdfxml_error_handler(request: Request, exc: RDFXMLError):
    """Report parser and IRI errors as 422 with their kind."""
    logger.warning(f"{request.method} {request.url.path} failed: {exc.kind}: {exc}")
    return JSONResponse(status_code=422, content={"error": exc.kind, "detail": str(exc)})


@app.get("/health")
def health() -> Dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy", "version": __version__}


@app.post("/parse", response_model=ParseResponse)
def parse(
    request: ParseRequest,
    response: Response,
    if_none_match: Optional[str] = Header(None),
    parser: CachedRDFXMLParser = Depends(get_parser),
):
    """Parse an RDF/XML document.

    The ``ETag`` is the md5 of the N-Triples output, so unchanged results can
    be revalidated with ``If-None-Match``.
    """
    result = parser.parse(request.document, base_url=request.base_url)
    etag = f'"{result.etag}"'
    if if_none_match and if_none_match == etag:
        return Response(status_code=304, headers={"ETag": etag})

    if request.format == "ntriples":
        return PlainTextResponse(
            result.ntriples,
            media_type="application/n-triples",
            headers={"ETag": etag},
        )

    response.headers["ETag"] = etag
    response.headers["Cache-Control"] = "private, max-age=0"
    return ParseResponse(
        triples=[_triple(t) for t in result.triples],
        count=len(result.triples),
        ntriples=result.ntriples,
    )


@app.post("/ntriples/validate", response_model=NTriplesResponse)
def validate_ntriples(request: NTriplesRequest) -> NTriplesResponse:
    """Parse an N-Triples document and report the first error, if any."""
    try:
        triples, comments = split_comments(request.text.splitlines())
    except RDFXMLError as err:
        return NTriplesResponse(
            valid=False,
            error=err.message,
            line_number=getattr(err, "line_number", None),
        )
    return NTriplesResponse(valid=True, count=len(triples), comments=len(comments))


@app.post("/iri/resolve", response_model=IRIResponse)
def resolve_iri(request: ResolveRequest) -> IRIResponse:
    """Resolve ``reference`` against ``base`` (RFC 3986 section 5.2)."""
    resolved = iri_module.resolve_reference(request.base, request.reference)
    return IRIResponse(iri=resolved.value, absolute=resolved.is_absolute)


@app.post("/iri/normalize", response_model=IRIResponse)
def normalize_iri(request: NormalizeRequest) -> IRIResponse:
    """Validate an IRI reference and normalize its percent-encoding."""
    parsed = iri_module.parse(request.iri)
    return IRIResponse(iri=parsed.value, absolute=parsed.is_absolute)


@app.get("/metrics/performance")
def get_performance_metrics() -> Dict[str, Any]:
    """Get parse, cache and endpoint metrics."""
    return get_monitor().get_performance_summary()


@app.get("/metrics/cache")
def get_cache_metrics(parser: CachedRDFXMLParser = Depends(get_parser)) -> Dict[str, Any]:
    """Get cache analytics and the live cache size."""
    analytics = get_monitor().get_cache_analytics()
    analytics["stats"] = parser.cache.get_cache_stats()
    return analytics
