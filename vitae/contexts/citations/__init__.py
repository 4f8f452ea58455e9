"""
Citations Context

Responsibilities:
- Parses citation entries (plain text, URL, DOI, BibTeX)
- Fetches URL titles and DOI metadata concurrently
- Converts resolved citations to display HTML with an optional year

Owns: Citation shapes, fetch transport, display formatting
Never: Decides which references are shown (rendering does)
"""

from vitae.contexts.citations.citation_data_structures import (
    BibtexRecord,
    BibtexSource,
    Citation,
    CslRecord,
    DoiSource,
    FetchedPage,
    PlainText,
    PlainTextWithYear,
    UrlSource,
    parse_citation,
)
from vitae.contexts.citations.resolver import ResolvedCitations, fetch_all, resolve_citations
from vitae.contexts.citations.transport import HttpTransport, Transport

__all__ = [
    # Citation shapes
    "Citation",
    "PlainText",
    "PlainTextWithYear",
    "UrlSource",
    "DoiSource",
    "BibtexSource",
    "parse_citation",
    # Resolved records
    "FetchedPage",
    "CslRecord",
    "BibtexRecord",
    # Resolution
    "fetch_all",
    "resolve_citations",
    "ResolvedCitations",
    "HttpTransport",
    "Transport",
]
