"""Record parsing and date handling utilities."""

import re
from datetime import date
from typing import Any

from models import Gender, PersonRecord, RelationshipKind, RelationshipRecord


# Month name mappings (handle abbreviations and full names)
MONTH_MAP = {
    "JAN": 1,
    "JANUARY": 1,
    "FEB": 2,
    "FEBRUARY": 2,
    "MAR": 3,
    "MARCH": 3,
    "APR": 4,
    "APRIL": 4,
    "MAY": 5,
    "JUN": 6,
    "JUNE": 6,
    "JUL": 7,
    "JULY": 7,
    "AUG": 8,
    "AUGUST": 8,
    "SEP": 9,
    "SEPT": 9,
    "SEPTEMBER": 9,
    "OCT": 10,
    "OCTOBER": 10,
    "NOV": 11,
    "NOVEMBER": 11,
    "DEC": 12,
    "DECEMBER": 12,
}

GENDER_MAP = {
    "M": Gender.MALE,
    "MALE": Gender.MALE,
    "F": Gender.FEMALE,
    "FEMALE": Gender.FEMALE,
    "O": Gender.OTHER,
    "OTHER": Gender.OTHER,
    "U": Gender.UNKNOWN,
    "UNKNOWN": Gender.UNKNOWN,
}

# The API also tags current marriages as "current"
KIND_ALIASES = {
    "current": RelationshipKind.SPOUSE,
    "married": RelationshipKind.SPOUSE,
}


def _iso_date(year: int, month: int, day: int) -> str | None:
    """YYYY-MM-DD for a real calendar day, None for things like 30 FEB or year 0."""
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def parse_date_string(date_str: str | None) -> str | None:
    """
    Parse a free-form date string into ISO format (YYYY-MM-DD).
    Returns None if the date cannot be parsed.

    Handles formats like:
    - "1839-08-29" and "1839-08-29T00:00:00Z"
    - "25 NOV 1954"
    - "1698"
    - "ABOUT 1905"
    - "JAN 1905"
    - "01/27/1920"
    - "April 17, 1850"
    """
    if not date_str:
        return None

    s = date_str.strip()
    s = s.strip("()")
    s = s.rstrip("?")
    # API timestamps: keep the date part
    s = re.sub(r"^(\d{4}-\d{2}-\d{2})[T ].*$", r"\1", s)
    s = re.sub(
        r"^(ABOUT|ABT\.?|BEFORE|BEF\.?|AFTER|AFT\.?|EST\.?|CAL\.?|CIRCA|CA\.?|AROUND):?\s*",
        "",
        s,
        flags=re.IGNORECASE,
    )
    s = s.strip()

    if not s:
        return None

    # ISO "1839-08-29" or "1746-00-00"
    match = re.match(r"^(\d{4})-(\d{2})-(\d{2})$", s)
    if match:
        year = int(match.group(1))
        month = int(match.group(2)) or 1
        day = int(match.group(3)) or 1
        return _iso_date(year, month, day)

    # "25 NOV 1954" or "11 Aug. 1968"
    match = re.match(r"^(\d{1,2})\s+([A-Za-z]+)\.?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(2).upper())
        if month:
            return _iso_date(int(match.group(3)), month, int(match.group(1)))

    # "NOV 1954" or "May, 1837"
    match = re.match(r"^([A-Za-z]+)\.?,?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(1).upper())
        if month:
            return _iso_date(int(match.group(2)), month, 1)

    # "1698"
    match = re.match(r"^(\d{4})$", s)
    if match:
        return _iso_date(int(match.group(1)), 1, 1)

    # "01-27-1920" or "01/27/1920" (MM-DD-YYYY)
    match = re.match(r"^(\d{1,2})[-/](\d{1,2})[-/](\d{4})$", s)
    if match:
        month = int(match.group(1))
        day = int(match.group(2))
        return _iso_date(int(match.group(3)), month, day)

    # "April 17, 1850" or "Oct.12,1929"
    match = re.match(r"^([A-Za-z]+)\.?\s*(\d{1,2}),?\s*(\d{4})$", s)
    if match:
        month = MONTH_MAP.get(match.group(1).upper())
        if month:
            return _iso_date(int(match.group(3)), month, int(match.group(2)))

    return None


def parse_gender(value: str | Gender | None) -> Gender:
    if isinstance(value, Gender):
        return value
    if not value:
        return Gender.UNKNOWN
    return GENDER_MAP.get(value.strip().upper(), Gender.OTHER)


def parse_relationship_kind(value: str | RelationshipKind | None) -> RelationshipKind | None:
    """Map a relationship_type string to a spousal kind, or None if not spousal."""
    if isinstance(value, RelationshipKind):
        return value
    if not value:
        return None
    key = value.strip().lower()
    if key in KIND_ALIASES:
        return KIND_ALIASES[key]
    try:
        return RelationshipKind(key)
    except ValueError:
        return None


def _optional_id(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def person_from_dict(data: dict[str, Any]) -> PersonRecord:
    """Build a PersonRecord from the API's person JSON shape."""
    if data.get("id") in (None, ""):
        raise ValueError(f"Person record has no id: {data!r}")

    return PersonRecord(
        id=str(data["id"]),
        first_name=data.get("first_name") or "",
        last_name=data.get("last_name") or None,
        gender=parse_gender(data.get("gender")),
        birth_date=parse_date_string(data.get("birth_date")),
        father_id=_optional_id(data.get("father_id")),
        mother_id=_optional_id(data.get("mother_id")),
        death_date=parse_date_string(data.get("death_date")),
        maiden_name=data.get("maiden_name") or None,
        nickname=data.get("nickname") or None,
    )


def relationship_from_dict(data: dict[str, Any]) -> RelationshipRecord | None:
    """
    Build a RelationshipRecord from the API's relationship JSON shape.

    Returns None for relationship types that are not spousal; parent/child
    links are carried on the person records instead.
    """
    if data.get("id") in (None, ""):
        raise ValueError(f"Relationship record has no id: {data!r}")

    kind = parse_relationship_kind(data.get("relationship_type"))
    if kind is None:
        return None

    return RelationshipRecord(
        id=str(data["id"]),
        person1_id=str(data.get("person1_id")),
        person2_id=str(data.get("person2_id")),
        relationship_type=kind,
        start_date=parse_date_string(data.get("start_date")),
        end_date=parse_date_string(data.get("end_date")),
    )


def normalize_data(
    people: list[dict[str, Any]], relationships: list[dict[str, Any]]
) -> tuple[list[PersonRecord], list[RelationshipRecord]]:
    """Convert raw person/relationship dicts into records, keeping input order."""
    persons = [person_from_dict(p) for p in people]
    records: list[RelationshipRecord] = []
    for rel in relationships:
        record = relationship_from_dict(rel)
        if record is not None:
            records.append(record)
    return persons, records
