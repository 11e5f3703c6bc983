from datetime import date

import pytest

from conftest import person
from models import Gender, RelationshipKind
from parsing import (
    normalize_data,
    parse_date_string,
    parse_gender,
    parse_relationship_kind,
    person_from_dict,
    relationship_from_dict,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1839-08-29", "1839-08-29"),
        ("1839-08-29T00:00:00Z", "1839-08-29"),
        ("1746-00-00", "1746-01-01"),
        ("25 NOV 1954", "1954-11-25"),
        ("11 Aug. 1968", "1968-08-11"),
        ("JAN 1905", "1905-01-01"),
        ("1698", "1698-01-01"),
        ("ABOUT 1905", "1905-01-01"),
        ("AFT 1900", "1900-01-01"),
        ("AFTER 1900", "1900-01-01"),
        ("01/27/1920", "1920-01-27"),
        ("April 17, 1850", "1850-04-17"),
        ("30 FEB 1950", None),
        ("1950-02-31", None),
        ("02/30/1950", None),
        ("0000", None),
        ("sometime", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_date_string(raw, expected) -> None:
    assert parse_date_string(raw) == expected


def test_parse_gender() -> None:
    assert parse_gender("M") is Gender.MALE
    assert parse_gender("female") is Gender.FEMALE
    assert parse_gender("O") is Gender.OTHER
    assert parse_gender("nonbinary") is Gender.OTHER
    assert parse_gender(None) is Gender.UNKNOWN
    assert parse_gender(Gender.MALE) is Gender.MALE


def test_parse_relationship_kind() -> None:
    assert parse_relationship_kind("spouse") is RelationshipKind.SPOUSE
    assert parse_relationship_kind("current") is RelationshipKind.SPOUSE
    assert parse_relationship_kind("Partner") is RelationshipKind.PARTNER
    assert parse_relationship_kind("divorced") is RelationshipKind.DIVORCED
    assert parse_relationship_kind("separated") is RelationshipKind.SEPARATED
    assert parse_relationship_kind("parent") is None
    assert parse_relationship_kind(None) is None


def test_person_from_dict() -> None:
    record = person_from_dict(
        {
            "id": 5,
            "first_name": "Ann",
            "last_name": "Lee",
            "gender": "F",
            "birth_date": "1900-02-03T00:00:00Z",
            "father_id": 3,
            "mother_id": "",
        }
    )

    assert record.id == "5"
    assert record.full_name == "Ann Lee"
    assert record.gender is Gender.FEMALE
    assert record.birth_date == "1900-02-03"
    assert record.birth_year == 1900
    assert record.father_id == "3"
    assert record.mother_id is None


def test_person_without_id_raises() -> None:
    with pytest.raises(ValueError):
        person_from_dict({"first_name": "Nobody"})


def test_relationship_from_dict() -> None:
    record = relationship_from_dict(
        {"id": "r1", "person1_id": "a", "person2_id": "b", "relationship_type": "divorced", "end_date": "1990"}
    )

    assert record.relationship_type is RelationshipKind.DIVORCED
    assert record.end_date == "1990-01-01"
    assert not record.is_current
    assert relationship_from_dict({"id": "r2", "person1_id": "a", "person2_id": "b", "relationship_type": "sibling"}) is None


def test_normalize_data_keeps_order_and_drops_non_spousal() -> None:
    people, relationships = normalize_data(
        [{"id": "b", "first_name": "B"}, {"id": "a", "first_name": "A"}],
        [
            {"id": "r1", "person1_id": "a", "person2_id": "b", "relationship_type": "spouse"},
            {"id": "r2", "person1_id": "a", "person2_id": "b", "relationship_type": "parent"},
        ],
    )

    assert [p.id for p in people] == ["b", "a"]
    assert [r.id for r in relationships] == ["r1"]


def test_age() -> None:
    assert person("x", birth_date="1950-06-15").age(on=date(2000, 6, 14)) == 49
    assert person("x", birth_date="1950-06-15", death_date="1990-06-15").age() == 40
    assert person("x").age() is None


def test_age_of_impossible_date_is_none() -> None:
    assert person("x", birth_date="1950-02-31").age() is None
    assert person("x", birth_date="1950-01-01", death_date="1990-13-01").age() is None
