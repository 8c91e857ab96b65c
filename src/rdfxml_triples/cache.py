"""Caching layer for parse results.

Provides:
    * In-memory dictionary cache with per-entry TTL.
    * :class:`CachedRDFXMLParser`, which memoizes whole-document parses keyed
      by the md5 of (document, base URL, parser options) and attaches an ETag
      computed from the N-Triples output.
    * Hit/miss/eviction reporting to :mod:`rdfxml_triples.monitoring`.

Quick examples:

Local cache get/set::

    from rdfxml_triples.cache import ParseCache
    cache = ParseCache(default_ttl=5)
    key = cache._make_key('rdfxml', '<rdf:RDF .../>', 'http://ex/')
    cache.set(key, {'parsed': True})
    assert cache.get(key)['parsed'] is True

Cached parser::

    from rdfxml_triples.cache import get_cached_parser
    result = get_cached_parser().parse(document, base_url="http://ex/doc")
    print(result.etag, len(result.triples))
"""

from __future__ import annotations

import hashlib
import logging
import os
import threading
import time
from collections import OrderedDict
from dataclasses import asdict, dataclass, field
from functools import lru_cache
from typing import Any, Dict, List, Optional

from .models import Triple
from .rdfxml_parser import ParserOptions, RDFXMLParser

logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """Cache entry with TTL."""

    data: Any
    timestamp: float = field(default_factory=time.time)
    ttl: float = 300.0

    def is_expired(self) -> bool:
        return time.time() - self.timestamp > self.ttl


@dataclass
class ParseResult:
    """Outcome of one successful parse.

    Attributes:
        triples: Triples in emission order.
        ntriples: The triples as an N-Triples document, one line each.
        etag: md5 of ``ntriples``; stable for identical output.
    """

    triples: List[Triple]
    ntriples: str
    etag: str


class ParseCache:
    """Simple in-memory cache for parse results.

    Notes:
        Single-process only. Expired entries are dropped on lookup and swept
        on every insert; beyond ``max_entries`` the least recently used entry
        is evicted. A lock guards the map since FastAPI runs sync endpoints
        in a threadpool.
    """

    def __init__(
        self,
        default_ttl: float = 300.0,
        enable_monitoring: bool = True,
        max_entries: int = 1024,
    ):
        """Initialize cache with default TTL in seconds."""
        self.default_ttl = default_ttl
        self.max_entries = max_entries
        self._cache: "OrderedDict[str, CacheEntry]" = OrderedDict()
        self._lock = threading.RLock()
        self.enable_monitoring = enable_monitoring
        self._monitor = None
        if enable_monitoring:
            from .monitoring import get_monitor

            self._monitor = get_monitor()

    def _make_key(self, *args) -> str:
        """Create cache key from arguments."""
        key_data = str(args).encode()
        return hashlib.md5(key_data).hexdigest()

    def get(self, key: str) -> Optional[Any]:
        """Retrieve a value if present and not expired.

        Args:
            key: Opaque cache key (md5 hex string).
        Returns:
            Cached value or None if absent/expired.
        """
        with self._lock:
            entry = self._cache.get(key)

            if entry is None:
                if self._monitor:
                    self._monitor.record_cache_miss()
                return None

            if entry.is_expired():
                self._cache.pop(key, None)
                if self._monitor:
                    self._monitor.record_cache_miss()
                    self._monitor.record_cache_eviction()
                    self._monitor.update_cache_size(len(self._cache))
                return None

            self._cache.move_to_end(key)
            if self._monitor:
                self._monitor.record_cache_hit()
            return entry.data

    def set(self, key: str, data: Any, ttl: Optional[float] = None) -> None:
        """Insert or replace a value; ``ttl`` overrides the instance default."""
        with self._lock:
            self._cache.pop(key, None)
            self._cache[key] = CacheEntry(data=data, ttl=ttl or self.default_ttl)
            evicted = self._evict_expired()
            while len(self._cache) > self.max_entries:
                self._cache.popitem(last=False)
                evicted += 1
            if self._monitor:
                for _ in range(evicted):
                    self._monitor.record_cache_eviction()
                self._monitor.update_cache_size(len(self._cache))

    def _evict_expired(self) -> int:
        expired = [key for key, entry in self._cache.items() if entry.is_expired()]
        for key in expired:
            del self._cache[key]
        if expired:
            logger.debug(f"Evicted {len(expired)} expired parse results")
        return len(expired)

    def invalidate(self, key: str) -> None:
        """Remove specific entry from cache."""
        with self._lock:
            self._cache.pop(key, None)

    def clear(self) -> None:
        """Clear all cache entries."""
        with self._lock:
            self._cache.clear()
        if self._monitor:
            self._monitor.update_cache_size(0)

    def __len__(self) -> int:
        return len(self._cache)

    def get_cache_stats(self) -> Dict[str, Any]:
        return {
            "cache_size": len(self._cache),
            "max_entries": self.max_entries,
            "default_ttl": self.default_ttl,
            "monitoring_enabled": self.enable_monitoring,
        }


class CachedRDFXMLParser:
    """Parser front-end that memoizes whole-document parses.

    Parse errors are not cached; the same document fails again on every call.
    """

    def __init__(
        self, cache: Optional[ParseCache] = None, options: Optional[ParserOptions] = None
    ):
        self.cache = cache if cache is not None else get_cache_instance()
        self.options = options or ParserOptions()

    def parse(self, document: str, base_url: Optional[str] = None) -> ParseResult:
        """Parse ``document`` or return the cached result for identical input.

        Args:
            document: RDF/XML text.
            base_url: Overrides ``options.base_url`` when given.

        Raises:
            RDFXMLError: If the document is not valid RDF/XML.
        """
        effective_base = self.options.base_url if base_url is None else base_url
        key = self.cache._make_key(
            "rdfxml", document, effective_base, str(asdict(self.options))
        )
        cached = self.cache.get(key)
        if cached is not None:
            return cached

        start = time.perf_counter()
        monitor = self.cache._monitor
        try:
            triples = RDFXMLParser(
                document, self.options, base_url=effective_base
            ).read_all_triples()
        except Exception as err:
            if monitor:
                monitor.record_parse(
                    duration=time.perf_counter() - start,
                    error_kind=getattr(err, "kind", type(err).__name__),
                )
            raise
        if monitor:
            monitor.record_parse(triples=len(triples), duration=time.perf_counter() - start)

        ntriples = "".join(f"{triple}\n" for triple in triples)
        result = ParseResult(
            triples=triples,
            ntriples=ntriples,
            etag=hashlib.md5(ntriples.encode("utf-8")).hexdigest(),
        )
        self.cache.set(key, result)
        logger.debug(f"Cached parse of {len(document)} characters ({len(triples)} triples)")
        return result

    def invalidate_all(self) -> None:
        self.cache.clear()


_parse_cache: Optional[ParseCache] = None


def get_cache_instance() -> ParseCache:
    """Return the process-wide cache configured by ``RDFXML_CACHE_TTL`` and ``RDFXML_CACHE_MAX_ENTRIES``."""
    global _parse_cache
    if _parse_cache is None:
        _parse_cache = ParseCache(
            default_ttl=float(os.getenv("RDFXML_CACHE_TTL", "300")),
            max_entries=int(os.getenv("RDFXML_CACHE_MAX_ENTRIES", "1024")),
        )
    return _parse_cache


@lru_cache(maxsize=4)
def get_cached_parser(parser_config_key: Optional[str] = None) -> CachedRDFXMLParser:
    """Get or create a cached parser.

    Args:
        parser_config_key: ``key=value`` pairs as accepted by
            :meth:`ParserOptions.from_string`; defaults to
            ``RDFXML_PARSER_CONFIG``.
    """
    if parser_config_key is None:
        options = ParserOptions.from_env()
    else:
        options = ParserOptions.from_string(parser_config_key)
    return CachedRDFXMLParser(cache=get_cache_instance(), options=options)
