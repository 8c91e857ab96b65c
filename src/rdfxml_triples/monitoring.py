"""In-process metrics for the parsing service.

Components record lightweight events here instead of aggregating numbers
themselves: the HTTP middleware records request latency per endpoint, the
parse cache records hits, misses and evictions, and the ``/parse`` handler
records each parse with its triple count or failure kind.

Collected domains:
        * Parse results (documents, triples emitted, failures by error kind)
        * Cache performance (hit ratio, evictions, entry count)
        * Endpoint latency and error rates

Every mutation holds a shared re-entrant lock; summaries are plain
dictionaries ready for JSON encoding.

Example::

        from rdfxml_triples.monitoring import get_monitor
        monitor = get_monitor()
        monitor.record_parse(triples=12, duration=0.004)
        monitor.get_performance_summary()["parsing"]["documents"]  # -> 1
"""

from __future__ import annotations

import threading
from collections import defaultdict, deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class CacheMetrics:
    """Aggregate cache counters.

    Attributes:
        hits: Lookups answered from the cache.
        misses: Lookups that required a parse.
        evictions: Entries dropped after their TTL expired.
        total_requests: hits + misses.
        hit_rate: Ratio 0..1, updated per lookup.
        cache_size: Current number of entries.
    """

    hits: int = 0
    misses: int = 0
    evictions: int = 0
    total_requests: int = 0
    hit_rate: float = 0.0
    cache_size: int = 0


@dataclass
class EndpointMetrics:
    total_requests: int = 0
    total_response_time: float = 0.0
    average_response_time: float = 0.0
    error_count: int = 0
    error_rate: float = 0.0
    last_accessed: Optional[datetime] = None
    response_times: deque = field(default_factory=lambda: deque(maxlen=100))


@dataclass
class ParseMetrics:
    """Totals over every document handed to the parser.

    Attributes:
        documents: Parses attempted.
        triples: Triples emitted by successful parses.
        total_parse_time: Cumulative seconds spent parsing.
        failures: Failed parses keyed by error kind (``InvalidIRI``, ``XMLIO``...).
    """

    documents: int = 0
    triples: int = 0
    total_parse_time: float = 0.0
    failures: Dict[str, int] = field(default_factory=lambda: defaultdict(int))


class PerformanceMonitor:
    """Thread-safe collector shared as a process-wide singleton."""

    def __init__(self, enable_detailed_tracking: bool = True):
        self.enable_detailed_tracking = enable_detailed_tracking
        self.start_time = datetime.now()
        self._lock = threading.RLock()
        self.cache_metrics = CacheMetrics()
        self.parse_metrics = ParseMetrics()
        self.endpoint_metrics: Dict[str, EndpointMetrics] = defaultdict(EndpointMetrics)
        self.recent_errors: deque = deque(maxlen=100)

    def record_cache_hit(self) -> None:
        with self._lock:
            self.cache_metrics.hits += 1
            self._update_cache_metrics()

    def record_cache_miss(self) -> None:
        with self._lock:
            self.cache_metrics.misses += 1
            self._update_cache_metrics()

    def record_cache_eviction(self) -> None:
        with self._lock:
            self.cache_metrics.evictions += 1

    def update_cache_size(self, cache_size: int) -> None:
        with self._lock:
            self.cache_metrics.cache_size = cache_size

    def _update_cache_metrics(self) -> None:
        metrics = self.cache_metrics
        metrics.total_requests = metrics.hits + metrics.misses
        metrics.hit_rate = metrics.hits / metrics.total_requests

    def record_parse(
        self, triples: int = 0, duration: float = 0.0, error_kind: Optional[str] = None
    ) -> None:
        """Record one parse.

        Args:
            triples: Triples emitted; ignored when ``error_kind`` is set.
            duration: Seconds spent in the parser.
            error_kind: ``kind`` of the raised :class:`~rdfxml_triples.errors.RDFXMLError`.
        """
        with self._lock:
            metrics = self.parse_metrics
            metrics.documents += 1
            metrics.total_parse_time += duration
            if error_kind is not None:
                metrics.failures[error_kind] += 1
            else:
                metrics.triples += triples

    def record_endpoint_request(
        self, endpoint: str, response_time: float, status_code: int = 200
    ) -> None:
        """Record an HTTP request; status codes >= 400 count as errors."""
        with self._lock:
            metrics = self.endpoint_metrics[endpoint]
            metrics.total_requests += 1
            metrics.total_response_time += response_time
            metrics.average_response_time = (
                metrics.total_response_time / metrics.total_requests
            )
            metrics.last_accessed = datetime.now()
            if self.enable_detailed_tracking:
                metrics.response_times.append(response_time)
            if status_code >= 400:
                metrics.error_count += 1
                self.recent_errors.append(
                    {
                        "endpoint": endpoint,
                        "status_code": status_code,
                        "timestamp": datetime.now().isoformat(),
                    }
                )
            metrics.error_rate = metrics.error_count / metrics.total_requests

    def get_performance_summary(self) -> Dict[str, Any]:
        """Return parsing, cache, api and error sections as one dictionary."""
        with self._lock:
            top_endpoints = sorted(
                self.endpoint_metrics.items(),
                key=lambda x: x[1].total_requests,
                reverse=True,
            )[:10]
            parsing = self.parse_metrics
            recent_errors_by_status: Dict[int, int] = defaultdict(int)
            for error in list(self.recent_errors)[-20:]:
                recent_errors_by_status[error["status_code"]] += 1

            return {
                "timestamp": datetime.now().isoformat(),
                "uptime_seconds": round((datetime.now() - self.start_time).total_seconds(), 2),
                "parsing": {
                    "documents": parsing.documents,
                    "triples": parsing.triples,
                    "failures": dict(parsing.failures),
                    "average_parse_time_ms": round(
                        parsing.total_parse_time * 1000 / max(parsing.documents, 1), 2
                    ),
                },
                "cache": {
                    "hit_rate": round(self.cache_metrics.hit_rate * 100, 2),
                    "total_requests": self.cache_metrics.total_requests,
                    "hits": self.cache_metrics.hits,
                    "misses": self.cache_metrics.misses,
                    "evictions": self.cache_metrics.evictions,
                    "cache_size": self.cache_metrics.cache_size,
                },
                "api": {
                    "total_requests": sum(
                        m.total_requests for m in self.endpoint_metrics.values()
                    ),
                    "top_endpoints": [
                        {
                            "endpoint": endpoint,
                            "requests": metrics.total_requests,
                            "avg_response_time_ms": round(
                                metrics.average_response_time * 1000, 2
                            ),
                            "error_rate": round(metrics.error_rate * 100, 2),
                        }
                        for endpoint, metrics in top_endpoints
                    ],
                },
                "errors": {
                    "recent_errors_by_status": dict(recent_errors_by_status),
                    "total_recent_errors": len(self.recent_errors),
                },
            }

    def get_cache_analytics(self) -> Dict[str, Any]:
        """Return cache performance, usage and tuning recommendations."""
        with self._lock:
            hit_rate = self.cache_metrics.hit_rate
            return {
                "performance": {
                    "hit_rate_percent": round(hit_rate * 100, 2),
                    "miss_rate_percent": round((1 - hit_rate) * 100, 2)
                    if self.cache_metrics.total_requests
                    else 0.0,
                    "cache_efficiency": (
                        "excellent"
                        if hit_rate > 0.9
                        else "good" if hit_rate > 0.8 else "fair" if hit_rate > 0.6 else "poor"
                    ),
                },
                "usage": {
                    "total_requests": self.cache_metrics.total_requests,
                    "cache_hits": self.cache_metrics.hits,
                    "cache_misses": self.cache_metrics.misses,
                    "evictions": self.cache_metrics.evictions,
                    "cache_size_entries": self.cache_metrics.cache_size,
                },
                "recommendations": self._get_cache_recommendations(),
            }

    def _get_cache_recommendations(self) -> List[str]:
        recommendations = []
        if self.cache_metrics.total_requests and self.cache_metrics.hit_rate < 0.8:
            recommendations.append(
                "Cache hit rate is below 80%. Consider increasing RDFXML_CACHE_TTL."
            )
        if self.cache_metrics.evictions > self.cache_metrics.hits * 0.1:
            recommendations.append(
                "High eviction rate detected. Entries expire before they are reused."
            )
        if not recommendations:
            recommendations.append("Cache performance is optimal. No changes recommended.")
        return recommendations

    def reset_metrics(self) -> None:
        """Reset all counters (used by tests)."""
        with self._lock:
            self.cache_metrics = CacheMetrics()
            self.parse_metrics = ParseMetrics()
            self.endpoint_metrics.clear()
            self.recent_errors.clear()
            self.start_time = datetime.now()


_monitor: Optional[PerformanceMonitor] = None


def get_monitor() -> PerformanceMonitor:
    """Return (and lazily initialize) the process-wide monitor."""
    global _monitor
    if _monitor is None:
        _monitor = PerformanceMonitor()
    return _monitor


def initialize_monitor(enable_detailed_tracking: bool = True) -> PerformanceMonitor:
    """Replace the global monitor with a fresh instance."""
    global _monitor
    _monitor = PerformanceMonitor(enable_detailed_tracking)
    return _monitor
