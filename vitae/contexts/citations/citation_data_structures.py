"""
Citation Data Structures

A citation in the person record is one of five shapes:

    references:
      plain: "Some free-form text"                  # PlainText
      dated: {text: "...", year: 2020}               # PlainTextWithYear
      page: {url: "https://example.com"}             # UrlSource
      paper: {doi: "10.1145/3385412.3385994"}        # DoiSource
      book: {bibtex_string: "@book{...}"}            # BibtexSource

Sources that need fetching (URL, DOI, BibTeX) are unresolved until `fetch()`
returns a separate resolved record. Every resolved record (and the two plain
shapes, which are born resolved) exposes:

    format()        -> display HTML, or None when it cannot be built
    extract_year()  -> publication year, or None
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from bs4 import BeautifulSoup
from pybtex.database import parse_string
from pybtex.exceptions import PybtexError

from vitae.contexts.citations.logger import _log_debug, _log_warning
from vitae.contexts.citations.transport import Transport
from vitae.utils.exceptions import FormatError, InputError

DOI_RESOLVER_URL = "https://doi.org"
CSL_JSON_MEDIA_TYPE = "application/citeproc+json"


def format_venue_and_link(
    container: Optional[str],
    publisher: Optional[str],
    doi: Optional[str],
    url: Optional[str],
) -> str:
    """Render the optional venue block followed by a DOI link, or the URL when there is no DOI."""
    parts = []
    if container:
        venue = f"In <i>{container}</i>"
        if publisher:
            venue += f", {publisher}"
        parts.append(f"{venue}. ")
    if doi:
        doi_url = f"{DOI_RESOLVER_URL}/{doi}"
        parts.append(f'DOI:<a href="{doi_url}">{doi_url}</a>')
    elif url:
        parts.append(f'<a href="{url}">{url}</a>')
    return "".join(parts)


# -- Born-resolved citations -------------------------------------------------


@dataclass(frozen=True)
class PlainText:
    text: str

    needs_fetch = False

    def fetch(self, transport: Transport) -> "PlainText":
        return self

    def format(self) -> Optional[str]:
        return self.text

    def extract_year(self) -> Optional[int]:
        return None

    def to_data(self) -> Any:
        return self.text


@dataclass(frozen=True)
class PlainTextWithYear:
    text: str
    year: Optional[int] = None

    needs_fetch = False

    def fetch(self, transport: Transport) -> "PlainTextWithYear":
        return self

    def format(self) -> Optional[str]:
        return self.text

    def extract_year(self) -> Optional[int]:
        return self.year

    def to_data(self) -> Any:
        data: Dict[str, Any] = {"text": self.text}
        if self.year is not None:
            data["year"] = self.year
        return data


# -- Web pages ----------------------------------------------------------------


def first_title(html: str) -> Optional[str]:
    """Text of the first <title> element in a page, or None if there is none."""
    soup = BeautifulSoup(html, "html.parser")
    title = soup.find("title")
    if title is None:
        return None
    return title.get_text().strip()


@dataclass(frozen=True)
class FetchedPage:
    url: str
    title: Optional[str]

    def format(self) -> Optional[str]:
        if self.title is None:
            return None
        return f'<b>{self.title}.</b> <a href="{self.url}">{self.url}</a>'

    def extract_year(self) -> Optional[int]:
        # Web pages carry no reliable publication date
        return None


@dataclass(frozen=True)
class UrlSource:
    url: str

    needs_fetch = True

    def fetch(self, transport: Transport) -> FetchedPage:
        title = first_title(transport.get_text(self.url))
        if title is None:
            _log_debug(f"No <title> found at {self.url}")
        return FetchedPage(url=self.url, title=title)

    def to_data(self) -> Any:
        return {"url": self.url}


# -- DOI / CSL-JSON -------------------------------------------------------------


def _first_string(value: Any) -> Optional[str]:
    # CSL providers send some text fields either as a string or a list of strings
    if isinstance(value, list):
        value = value[0] if value else None
    return value if isinstance(value, str) and value else None


@dataclass(frozen=True)
class CslAuthor:
    given: str = ""
    family: str = ""

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.given, self.family) if part)


@dataclass(frozen=True)
class CslRecord:
    """The subset of a CSL-JSON item used for display."""

    title: str
    authors: List[CslAuthor] = field(default_factory=list)
    year: Optional[int] = None
    container_title: Optional[str] = None
    publisher: Optional[str] = None
    doi: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> "CslRecord":
        """
        Build a record from decoded CSL-JSON.

        Raises:
            FormatError: If the payload is not an object or has no title
        """
        if not isinstance(data, dict):
            raise FormatError("CSL-JSON payload is not an object")
        title = _first_string(data.get("title"))
        if title is None:
            raise FormatError("CSL-JSON payload has no title")

        authors = [
            CslAuthor(given=author.get("given", ""), family=author.get("family", ""))
            for author in data.get("author") or []
            if isinstance(author, dict)
        ]

        year = None
        date_parts = (data.get("issued") or {}).get("date-parts") or []
        if date_parts and date_parts[0]:
            try:
                year = int(date_parts[0][0])
            except (TypeError, ValueError) as e:
                raise FormatError(f"CSL-JSON issued year is not a number: {date_parts[0][0]!r}") from e

        return cls(
            title=title,
            authors=authors,
            year=year,
            container_title=_first_string(data.get("container-title")),
            publisher=_first_string(data.get("publisher")),
            doi=_first_string(data.get("DOI")),
            url=_first_string(data.get("URL")),
        )

    def format(self) -> Optional[str]:
        parts = []
        if self.authors:
            parts.append(", ".join(author.full_name for author in self.authors) + ". ")
        if self.year is not None:
            parts.append(f"{self.year}. ")
        parts.append(f"<b>{self.title}.</b> ")
        parts.append(format_venue_and_link(self.container_title, self.publisher, self.doi, self.url))
        return "".join(parts)

    def extract_year(self) -> Optional[int]:
        return self.year


@dataclass(frozen=True)
class DoiSource:
    doi: str

    needs_fetch = True

    def fetch(self, transport: Transport) -> CslRecord:
        data = transport.get_json(f"{DOI_RESOLVER_URL}/{self.doi}", accept=CSL_JSON_MEDIA_TYPE)
        _log_debug(f"Fetched {self.doi}")
        return CslRecord.from_json(data)

    def to_data(self) -> Any:
        return {"doi": self.doi}


# -- BibTeX -------------------------------------------------------------------


def parse_bibtex_tags(bibtex_string: str) -> Dict[str, str]:
    """
    Parse a BibTeX string and return the first entry's tags.

    Tag names are lower-cased. Person fields (author, editor) are joined
    with " and " in "Last, First" form.

    Raises:
        FormatError: If the string is not valid BibTeX or holds no entry
    """
    try:
        data = parse_string(bibtex_string, "bibtex")
    except PybtexError as e:
        raise FormatError(f"Malformed BibTeX: {e}") from e

    entries = list(data.entries.values())
    if not entries:
        raise FormatError("No citations found in bibtex")
    if len(entries) > 1:
        _log_warning("More than 1 citation found in bibtex, only the first one is used")

    entry = entries[0]
    tags = {key.lower(): value for key, value in entry.fields.items()}
    for role, persons in entry.persons.items():
        tags[role.lower()] = " and ".join(str(person) for person in persons)
    return tags


@dataclass(frozen=True)
class BibtexRecord:
    tags: Dict[str, str]

    def format(self) -> Optional[str]:
        """
        Raises:
            FormatError: If the entry has no title
        """
        title = self.tags.get("title")
        if title is None:
            raise FormatError("BibTeX entry has no title")

        parts = []
        if "author" in self.tags:
            parts.append(f"{self.tags['author']}. ")
        if "year" in self.tags:
            parts.append(f"{self.tags['year']}. ")
        parts.append(f"<b>{title}.</b> ")
        parts.append(
            format_venue_and_link(
                self.tags.get("journal"),
                self.tags.get("publisher"),
                self.tags.get("doi"),
                self.tags.get("url"),
            )
        )
        return "".join(parts)

    def extract_year(self) -> Optional[int]:
        """
        Raises:
            FormatError: If the year tag is not a number
        """
        year = self.tags.get("year")
        if year is None:
            return None
        try:
            return int(year.strip())
        except ValueError as e:
            raise FormatError(f"BibTeX year is not a number: {year!r}") from e


@dataclass(frozen=True)
class BibtexSource:
    bibtex_string: str

    needs_fetch = True

    def fetch(self, transport: Transport) -> BibtexRecord:
        return BibtexRecord(tags=parse_bibtex_tags(self.bibtex_string))

    def to_data(self) -> Any:
        return {"bibtex_string": self.bibtex_string}


Citation = Union[PlainText, PlainTextWithYear, UrlSource, DoiSource, BibtexSource]
ResolvedCitation = Union[PlainText, PlainTextWithYear, FetchedPage, CslRecord, BibtexRecord]


def parse_citation(data: Any, location: str = "references") -> Citation:
    """
    Parse one citation entry from the person record.

    Raises:
        InputError: If the entry matches none of the citation shapes
    """
    if isinstance(data, str):
        return PlainText(data)
    if isinstance(data, dict):
        if "text" in data:
            year = data.get("year")
            if year is not None and not isinstance(year, int):
                raise InputError(f"Citation year must be an integer, got {year!r}", field=location)
            return PlainTextWithYear(text=str(data["text"]), year=year)
        if "url" in data:
            return UrlSource(url=str(data["url"]))
        if "doi" in data:
            return DoiSource(doi=str(data["doi"]))
        if "bibtex_string" in data:
            return BibtexSource(bibtex_string=str(data["bibtex_string"]))
    raise InputError("Unrecognized citation entry", field=location)
