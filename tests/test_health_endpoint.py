from fastapi.testclient import TestClient

from rdfxml_triples import __version__
from rdfxml_triples.app import app, get_parser
from rdfxml_triples.cache import CachedRDFXMLParser, ParseCache


def override_parser():
    return CachedRDFXMLParser(cache=ParseCache(enable_monitoring=False))


def test_health_basic():
    """Health endpoint should return healthy status and the package version."""
    app.dependency_overrides[get_parser] = override_parser
    client = TestClient(app)
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["version"] == __version__
    assert resp.headers["X-API-Version"] == __version__
    assert resp.headers["X-Response-Time"].endswith("s")
