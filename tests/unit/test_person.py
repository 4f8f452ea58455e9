"""Unit tests for the person record and its parts."""

from datetime import date

import pytest

from vitae.contexts.citations.citation_data_structures import DoiSource, PlainText, PlainTextWithYear
from vitae.contexts.intake.person_data_structure import DateRange, Degree, Person
from vitae.contexts.projects.project_data_structures import ImportDirective, RawProject, SetSortOrder
from vitae.utils.exceptions import ConfigError, InputError


# ============================================================================
# DateRange
# ============================================================================


@pytest.mark.unit
def test_date_range_parse_and_display():
    closed = DateRange.parse("2016-09~2018-06")
    ongoing = DateRange.parse("2018-07~")

    assert closed == DateRange(date(2016, 9, 1), date(2018, 6, 1))
    assert closed.to_resume_string() == "Sep,&nbsp;2016 - Jun,&nbsp;2018"
    assert ongoing.end is None
    assert ongoing.to_resume_string() == "Jul,&nbsp;2018 - Current"
    assert str(closed) == "2016-09~2018-06"
    assert str(ongoing) == "2018-07~"


@pytest.mark.unit
@pytest.mark.parametrize("text", ["2016-09", "2016-09~2017-01~2018-01"])
def test_date_range_needs_exactly_two_parts(text):
    with pytest.raises(ConfigError, match="2 and only 2 dates"):
        DateRange.parse(text)


@pytest.mark.unit
@pytest.mark.parametrize("text", ["2016-13~", "Sept 2016~", "~2018-01"])
def test_date_range_rejects_bad_months(text):
    with pytest.raises(ConfigError):
        DateRange.parse(text)


@pytest.mark.unit
def test_degree_display():
    assert Degree("PhD").to_resume_string() == "PhD"
    assert Degree.BS.to_resume_string() == "Bachelor of Science"


# ============================================================================
# Person
# ============================================================================


@pytest.mark.unit
def test_person_from_dict(person_data):
    person_data["projects"] = [{"from": "github", "ignore_forks": True}, {"name": "notes"}, {"order_by": "stars"}]
    person_data["references"] = {"dragon": "Aho et al. Compilers.", "paper": {"doi": "10.1/1"}}
    person_data["publications"] = [{"text": "A talk", "year": 2019}]

    person = Person.from_dict(person_data)

    assert person.name == "Jane Doe"
    assert person.github_username == "janedoe"
    assert person.educations[0].degree is Degree.MS
    assert person.experiences[0].duration.end is None
    assert isinstance(person.projects[0], ImportDirective)
    assert isinstance(person.projects[1], RawProject)
    assert isinstance(person.projects[2], SetSortOrder)
    assert person.references == {"dragon": PlainText("Aho et al. Compilers."), "paper": DoiSource("10.1/1")}
    assert person.publications == [PlainTextWithYear("A talk", 2019)]


@pytest.mark.unit
def test_person_round_trips_through_dict(person_data):
    person_data["skills"] = [{"category": "Languages", "description": "Rust, Python"}]
    person_data["references"] = {"blog": {"url": "https://blog.example.com"}}
    person = Person.from_dict(person_data)

    assert Person.from_dict(person.to_dict()) == person


@pytest.mark.unit
@pytest.mark.parametrize("missing", ["name", "contacts", "educations", "experiences", "projects"])
def test_person_requires_fields(person_data, missing):
    del person_data[missing]

    with pytest.raises(InputError):
        Person.from_dict(person_data)


@pytest.mark.unit
def test_person_rejects_unknown_degree(person_data):
    person_data["educations"][0]["degree"] = "MBA"

    with pytest.raises(InputError):
        Person.from_dict(person_data)


@pytest.mark.unit
def test_person_rejects_non_mapping():
    with pytest.raises(InputError):
        Person.from_dict(["Jane Doe"])


@pytest.mark.unit
def test_github_username_absent(person_data):
    person_data["contacts"] = [{"type": "email", "value": "jane@example.com"}]

    assert Person.from_dict(person_data).github_username is None
