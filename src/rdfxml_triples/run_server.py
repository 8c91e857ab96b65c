"""Executable entry point for the RDF/XML Triples FastAPI application.

Process managers can import the stable ``app`` object from
``rdfxml_triples.app``; ``python -m rdfxml_triples.run_server`` starts a
development server directly.

Environment Variables:
    PORT (int): Override listening port (default 8000).
    LOG_LEVEL (str): Root logging level (default INFO).
    RDFXML_PARSER_CONFIG, RDFXML_CACHE_TTL, RDFXML_CACHE_MAX_ENTRIES: See :mod:`rdfxml_triples.cache`.

Example:
    $ PORT=9000 python -m rdfxml_triples.run_server

Production Recommendation:
        uvicorn rdfxml_triples.app:app --host 0.0.0.0 --port 8000 --workers 4
"""

from __future__ import annotations

import logging
import os

import uvicorn

from .app import app


def main() -> None:
    """Configure logging and launch uvicorn with development-friendly defaults."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=int(os.getenv("PORT", "8000")))


if __name__ == "__main__":
    main()
