"""
Citation Resolver

Resolves every citation of a person in one concurrent batch, then converts the
results to display text.

The batch is fail-fast: the first fetch error cancels the fetches that have not
started yet and is re-raised; in-flight fetches are abandoned. Formatting is
more forgiving: a resolved citation that cannot produce display text is dropped.
"""

import os
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from dotenv import load_dotenv

from vitae.contexts.citations.citation_data_structures import (
    Citation,
    PlainText,
    PlainTextWithYear,
    ResolvedCitation,
)
from vitae.contexts.citations.logger import _log_debug, _log_warning, log_batch_result
from vitae.contexts.citations.transport import Transport
from vitae.utils.exceptions import FormatError

load_dotenv()
FETCH_WORKERS = int(os.getenv("VITAE_FETCH_WORKERS", "8"))


@dataclass
class ResolvedCitations:
    """
    Display-ready citations.

    Attributes:
        references: Reference key -> display text, in declaration order
        publications: Publications with their year, in declaration order
    """

    references: Dict[str, PlainText]
    publications: List[PlainTextWithYear]


def fetch_all(
    citations: Sequence[Citation],
    transport: Transport,
    max_workers: int = FETCH_WORKERS,
) -> List[ResolvedCitation]:
    """
    Fetch every citation that needs it, concurrently.

    Returns:
        Resolved citations, positionally matching the input

    Raises:
        NetworkError, FormatError: The first failure of any fetch
    """
    resolved: List[ResolvedCitation] = list(citations)
    pending = [(index, citation) for index, citation in enumerate(citations) if citation.needs_fetch]
    if not pending:
        return resolved

    start = time.time()
    executor = ThreadPoolExecutor(max_workers=max_workers)
    futures = {executor.submit(citation.fetch, transport): index for index, citation in pending}
    try:
        for future in as_completed(futures):
            resolved[futures[future]] = future.result()
    except Exception:
        executor.shutdown(wait=False, cancel_futures=True)
        raise
    executor.shutdown()

    log_batch_result(len(pending), len(citations), time.time() - start)
    return resolved


def display_text(citation: ResolvedCitation) -> Optional[str]:
    """Display text of a resolved citation, or None when it has to be dropped."""
    try:
        return citation.format()
    except FormatError as e:
        _log_warning(f"Dropping citation: {e}")
        return None


def resolve_citations(
    references: Dict[str, Citation],
    publications: Sequence[Citation],
    transport: Transport,
    max_workers: int = FETCH_WORKERS,
) -> ResolvedCitations:
    """
    Resolve references and publications together and convert them to display text.

    References without display text are dropped. Publications also get their
    year; a malformed year is fatal.

    Raises:
        NetworkError: If any fetch fails
        FormatError: If any payload is malformed or a year is not numeric
    """
    keys = list(references)
    batch = [references[key] for key in keys] + list(publications)
    resolved = fetch_all(batch, transport, max_workers)

    resolved_references: Dict[str, PlainText] = {}
    for key, citation in zip(keys, resolved[: len(keys)]):
        text = display_text(citation)
        if text is None:
            _log_debug(f"Reference '{key}' has no display text")
            continue
        resolved_references[key] = PlainText(text)

    resolved_publications: List[PlainTextWithYear] = []
    for citation in resolved[len(keys):]:
        text = display_text(citation)
        if text is None:
            continue
        resolved_publications.append(PlainTextWithYear(text=text, year=citation.extract_year()))

    return ResolvedCitations(references=resolved_references, publications=resolved_publications)
