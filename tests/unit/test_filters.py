"""Unit tests for the language_stats and emph template filters."""

import pytest

from vitae.contexts.projects.project_data_structures import LanguageStat
from vitae.contexts.rendering.filters import emph, language_stats


@pytest.mark.unit
def test_language_stats_stops_after_threshold():
    languages = [
        LanguageStat("Rust", 80.0),
        LanguageStat("C", 16.0),
        LanguageStat("Shell", 3.0),
        LanguageStat("Makefile", 1.0),
    ]

    html = language_stats(languages)

    assert '<span style="width:80%;opacity:1.0"></span>' in html
    assert "<span>C</span>" in html
    assert "Shell" not in html
    assert "Makefile" not in html
    assert "width:4%" in html
    assert "<span>Other</span>" in html


@pytest.mark.unit
def test_language_stats_adds_other_for_remainder():
    html = language_stats([LanguageStat("Python", 60.0), LanguageStat("JavaScript", 30.0)])

    assert "<span>Python</span>" in html
    assert "<span>JavaScript</span>" in html
    assert "width:10%" in html
    assert "<span>Other</span>" in html


@pytest.mark.unit
def test_language_stats_without_remainder_has_no_other():
    html = language_stats([LanguageStat("Go", 100.0)])

    assert "<span>Go</span>" in html
    assert "Other" not in html


@pytest.mark.unit
def test_language_stats_fades_each_language():
    html = language_stats([LanguageStat("A", 50.0), LanguageStat("B", 50.0)])

    assert html.index("opacity:1.0") < html.index("opacity:0.548")


@pytest.mark.unit
def test_emph_underlines_every_occurrence():
    assert emph("Doe, J. and Roe, R. and Doe, J.", "Doe, J.") == (
        "<u>Doe, J.</u> and Roe, R. and <u>Doe, J.</u>"
    )
    assert emph("Nothing here", "Jane Doe") == "Nothing here"
    assert emph("Unchanged", "") == "Unchanged"
