from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from rdfxml_triples.app import ParseRequest, ParseResponse, app, get_parser
from rdfxml_triples.cache import CachedRDFXMLParser, ParseCache
from rdfxml_triples.monitoring import initialize_monitor

FIXTURE = Path(__file__).resolve().parent / "fixtures" / "rdfxml" / "library.rdf"
RDF = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"


def create_client():
    initialize_monitor()
    cache = ParseCache()
    app.dependency_overrides[get_parser] = lambda: CachedRDFXMLParser(cache=cache)
    return TestClient(app)


def test_parse_fixture_as_json():
    client = create_client()
    response = client.post("/parse", json={"document": FIXTURE.read_text(encoding="utf-8")})
    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 6
    assert data["ntriples"].count("\n") == 6

    first = data["triples"][0]
    assert first["subject"] == {
        "type": "iri",
        "value": "http://example.org/library/books/1",
        "datatype": None,
        "language": None,
    }
    assert first["predicate"] == RDF + "type"
    assert first["object"]["value"] == "http://example.org/terms#Book"

    title = data["triples"][1]["object"]
    assert title["type"] == "literal"
    assert title["value"] == "RDF Primer"
    assert title["language"] == "en"
    assert title["datatype"] == RDF + "langString"

    author = data["triples"][3]["object"]
    assert author["type"] == "bnode"
    assert data["triples"][4]["subject"]["value"] == author["value"]


def test_parse_ntriples_format():
    client = create_client()
    document = (
        f'<rdf:RDF xmlns:rdf="{RDF}" xmlns:ex="http://example.org/">'
        '<rdf:Description rdf:about="http://example.org/s" ex:p="v"/></rdf:RDF>'
    )
    response = client.post("/parse", json={"document": document, "format": "ntriples"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/n-triples")
    assert response.text == '<http://example.org/s> <http://example.org/p> "v" .\n'


def test_parse_uses_request_base_url():
    client = create_client()
    document = f'<rdf:RDF xmlns:rdf="{RDF}" xmlns:ex="http://example.org/"><ex:T rdf:ID="me"/></rdf:RDF>'
    response = client.post(
        "/parse", json={"document": document, "base_url": "http://example.org/doc#old"}
    )
    assert response.status_code == 200
    assert response.json()["triples"][0]["subject"]["value"] == "http://example.org/doc#me"


@pytest.mark.parametrize(
    "document, kind",
    [
        ("<rdf:RDF", "XMLIO"),
        (f'<rdf:RDF xmlns:rdf="{RDF}"><rdf:Description rdf:about="rel"/></rdf:RDF>', "InvalidIRI"),
        (f'<rdf:RDF xmlns:rdf="{RDF}"><rdf:li/></rdf:RDF>', "UnexpectedContent"),
        (
            f'<rdf:RDF xmlns:rdf="{RDF}" xmlns:ex="http://example.org/">'
            + "<rdf:Description><ex:p>" * 150
            + "</ex:p></rdf:Description>" * 150
            + "</rdf:RDF>",
            "UnexpectedContent",
        ),
        (
            f'<rdf:RDF xmlns:rdf="{RDF}"><rdf:Description rdf:nodeID="a."/></rdf:RDF>',
            "InvalidBlankNode",
        ),
    ],
)
def test_parse_errors_return_422(document, kind):
    client = create_client()
    response = client.post("/parse", json={"document": document})
    assert response.status_code == 422
    data = response.json()
    assert data["error"] == kind
    assert data["detail"]


def test_parse_request_validation():
    client = create_client()
    assert client.post("/parse", json={}).status_code == 422
    assert client.post("/parse", json={"document": "<a/>", "format": "xml"}).status_code == 422


def test_request_and_response_models():
    request = ParseRequest(document="<a/>")
    assert request.format == "json"
    assert request.base_url is None
    assert ParseResponse(count=0, ntriples="").triples == []


def test_ntriples_validate():
    client = create_client()
    text = '# header\n<http://a/> <http://b/> "c" .\n\n_:x <http://b/> <http://a/> .\n'
    response = client.post("/ntriples/validate", json={"text": text})
    assert response.status_code == 200
    assert response.json() == {
        "valid": True,
        "count": 2,
        "comments": 1,
        "error": None,
        "line_number": None,
    }


def test_ntriples_validate_reports_line():
    client = create_client()
    text = '<http://a/> <http://b/> "c" .\n<http://a/> "bad" <http://b/> .\n'
    data = client.post("/ntriples/validate", json={"text": text}).json()
    assert data["valid"] is False
    assert data["line_number"] == 2
    assert data["error"]


def test_iri_resolve():
    client = create_client()
    response = client.post(
        "/iri/resolve", json={"base": "http://a/b/c/d;p?q", "reference": "../g"}
    )
    assert response.status_code == 200
    assert response.json() == {"iri": "http://a/b/g", "absolute": True}


def test_iri_resolve_invalid_base():
    client = create_client()
    response = client.post("/iri/resolve", json={"base": "http://a b/", "reference": "g"})
    assert response.status_code == 422
    assert response.json()["error"] == "InvalidIRI"


def test_relative_base_is_rejected():
    client = create_client()
    response = client.post("/iri/resolve", json={"base": "a/b", "reference": "g"})
    assert response.status_code == 422
    assert response.json()["error"] == "InvalidIRI"

    document = f'<rdf:RDF xmlns:rdf="{RDF}" xmlns:ex="http://example.org/"><ex:T rdf:about="x"/></rdf:RDF>'
    response = client.post("/parse", json={"document": document, "base_url": "doc.rdf"})
    assert response.status_code == 422
    assert response.json()["error"] == "InvalidIRI"


def test_iri_normalize():
    client = create_client()
    response = client.post("/iri/normalize", json={"iri": "caf%c3%a9?x=%7e"})
    assert response.status_code == 200
    assert response.json() == {"iri": "café?x=~", "absolute": False}


def test_metrics_endpoints():
    client = create_client()
    document = FIXTURE.read_text(encoding="utf-8")
    client.post("/parse", json={"document": document})
    client.post("/parse", json={"document": document})
    client.post("/parse", json={"document": "<broken"})

    summary = client.get("/metrics/performance").json()
    assert summary["parsing"]["documents"] == 2
    assert summary["parsing"]["triples"] == 6
    assert summary["parsing"]["failures"] == {"XMLIO": 1}
    assert summary["cache"]["hits"] == 1
    endpoints = {e["endpoint"]: e for e in summary["api"]["top_endpoints"]}
    assert endpoints["POST /parse"]["requests"] == 3

    analytics = client.get("/metrics/cache").json()
    assert analytics["usage"]["cache_hits"] == 1
    assert analytics["stats"]["cache_size"] == 1
