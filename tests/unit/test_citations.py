"""Unit tests for citation parsing, fetching and formatting."""

import json

import pytest

from vitae.contexts.citations.citation_data_structures import (
    CSL_JSON_MEDIA_TYPE,
    BibtexRecord,
    BibtexSource,
    CslRecord,
    DoiSource,
    FetchedPage,
    PlainText,
    PlainTextWithYear,
    UrlSource,
    first_title,
    parse_bibtex_tags,
    parse_citation,
)
from vitae.utils.exceptions import FormatError, InputError

DOE_BIBTEX = """
@article{doe2020,
  author = {Doe, J.},
  year = {2020},
  title = {Foo},
  journal = {Bar},
  DOI = {10.1/1}
}
"""

CSL_PAYLOAD = {
    "title": "Zero-cost abstractions",
    "author": [{"given": "Ada", "family": "Lovelace"}, {"family": "Babbage"}],
    "issued": {"date-parts": [[2021, 6]]},
    "container-title": ["Proceedings of PLDI"],
    "publisher": "ACM",
    "DOI": "10.1145/1",
    "URL": "https://dl.acm.org/doi/10.1145/1",
}


# ============================================================================
# Parsing
# ============================================================================


@pytest.mark.unit
def test_parse_citation_shapes():
    assert parse_citation("Free text") == PlainText("Free text")
    assert parse_citation({"text": "Dated", "year": 2019}) == PlainTextWithYear("Dated", 2019)
    assert parse_citation({"url": "https://example.com"}) == UrlSource("https://example.com")
    assert parse_citation({"doi": "10.1/1"}) == DoiSource("10.1/1")
    assert parse_citation({"bibtex_string": DOE_BIBTEX}) == BibtexSource(DOE_BIBTEX)


@pytest.mark.unit
@pytest.mark.parametrize("data", [42, {"isbn": "123"}, {"text": "x", "year": "2019"}])
def test_parse_citation_rejects_unknown_shapes(data):
    with pytest.raises(InputError):
        parse_citation(data)


@pytest.mark.unit
def test_plain_citations_are_born_resolved(fake_transport):
    citation = PlainTextWithYear("Dated", 2019)

    assert citation.needs_fetch is False
    assert citation.fetch(fake_transport) is citation
    assert citation.format() == "Dated"
    assert citation.extract_year() == 2019
    assert PlainText("x").extract_year() is None
    assert fake_transport.calls == []


# ============================================================================
# BibTeX
# ============================================================================


@pytest.mark.unit
def test_bibtex_format_and_year():
    record = BibtexSource(DOE_BIBTEX).fetch(transport=None)

    assert record.format() == (
        'Doe, J.. 2020. <b>Foo.</b> In <i>Bar</i>. '
        'DOI:<a href="https://doi.org/10.1/1">https://doi.org/10.1/1</a>'
    )
    assert record.extract_year() == 2020


@pytest.mark.unit
def test_bibtex_tag_names_are_lowercased_and_authors_joined():
    tags = parse_bibtex_tags(
        "@book{k, Title = {T}, Author = {Doe, Jane and Roe, Richard}, Publisher = {P}}"
    )

    assert tags["title"] == "T"
    assert tags["publisher"] == "P"
    assert tags["author"] == "Doe, Jane and Roe, Richard"


@pytest.mark.unit
def test_bibtex_uses_first_entry_only():
    tags = parse_bibtex_tags("@misc{a, title = {First}}\n@misc{b, title = {Second}}")

    assert tags["title"] == "First"


@pytest.mark.unit
def test_bibtex_without_entries_is_an_error():
    with pytest.raises(FormatError, match="No citations found"):
        parse_bibtex_tags("just some text")


@pytest.mark.unit
def test_bibtex_without_title_cannot_format():
    record = BibtexRecord({"author": "Doe, J."})

    with pytest.raises(FormatError):
        record.format()


@pytest.mark.unit
def test_bibtex_year_must_be_numeric():
    assert BibtexRecord({"title": "T"}).extract_year() is None
    assert BibtexRecord({"title": "T", "year": " 1999 "}).extract_year() == 1999
    with pytest.raises(FormatError):
        BibtexRecord({"title": "T", "year": "forthcoming"}).extract_year()


@pytest.mark.unit
def test_bibtex_without_doi_links_url():
    record = BibtexRecord({"title": "T", "url": "https://example.com/t"})

    assert record.format() == '<b>T.</b> <a href="https://example.com/t">https://example.com/t</a>'


# ============================================================================
# DOI
# ============================================================================


@pytest.mark.unit
def test_doi_fetch_requests_csl_json(make_transport):
    transport = make_transport({"https://doi.org/10.1145/1": json.dumps(CSL_PAYLOAD)})

    record = DoiSource("10.1145/1").fetch(transport)

    assert transport.calls == [("https://doi.org/10.1145/1", CSL_JSON_MEDIA_TYPE)]
    assert record.extract_year() == 2021
    assert record.format() == (
        "Ada Lovelace, Babbage. 2021. <b>Zero-cost abstractions.</b> "
        "In <i>Proceedings of PLDI</i>, ACM. "
        'DOI:<a href="https://doi.org/10.1145/1">https://doi.org/10.1145/1</a>'
    )


@pytest.mark.unit
def test_doi_malformed_payload(make_transport):
    transport = make_transport({"https://doi.org/10.1/bad": "<html>not json</html>"})

    with pytest.raises(FormatError):
        DoiSource("10.1/bad").fetch(transport)


@pytest.mark.unit
def test_csl_record_requires_title():
    with pytest.raises(FormatError):
        CslRecord.from_json({"author": []})
    with pytest.raises(FormatError):
        CslRecord.from_json(["not", "an", "object"])


@pytest.mark.unit
def test_csl_record_minimal():
    record = CslRecord.from_json({"title": "Untitled draft"})

    assert record.authors == []
    assert record.extract_year() is None
    assert record.format() == "<b>Untitled draft.</b> "


# ============================================================================
# URL
# ============================================================================


@pytest.mark.unit
def test_first_title_takes_first_element():
    html = "<html><head><title> Home </title></head><body><title>Other</title></body></html>"

    assert first_title(html) == "Home"
    assert first_title("<html><body>No title</body></html>") is None


@pytest.mark.unit
def test_url_fetch_formats_title_and_link(make_transport):
    transport = make_transport({"https://blog.example.com": "<title>Jane's blog</title>"})

    page = UrlSource("https://blog.example.com").fetch(transport)

    assert page == FetchedPage("https://blog.example.com", "Jane's blog")
    assert page.format() == (
        '<b>Jane\'s blog.</b> <a href="https://blog.example.com">https://blog.example.com</a>'
    )
    assert page.extract_year() is None


@pytest.mark.unit
def test_url_without_title_has_no_display_text(make_transport):
    transport = make_transport({"https://example.com": "<p>bare</p>"})

    assert UrlSource("https://example.com").fetch(transport).format() is None
