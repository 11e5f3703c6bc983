import os
import sys
from pathlib import Path

import pytest

# Ensure the project src directory is on sys.path for test imports
PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

# Headless rendering for the plotting tests
os.environ.setdefault("MPLBACKEND", "Agg")

from models import Gender, PersonRecord, RelationshipKind, RelationshipRecord  # noqa: E402


def person(pid, first_name=None, gender=Gender.UNKNOWN, birth_date=None, father_id=None, mother_id=None, **kw):
    return PersonRecord(
        id=pid,
        first_name=first_name or pid,
        gender=gender,
        birth_date=birth_date,
        father_id=father_id,
        mother_id=mother_id,
        **kw,
    )


def spouse(rid, a, b, kind=RelationshipKind.SPOUSE):
    return RelationshipRecord(id=rid, person1_id=a, person2_id=b, relationship_type=kind)


@pytest.fixture
def small_family():
    """John and Mary with their son Sam."""
    people = [
        person("p1", "John", Gender.MALE, "1950-03-01"),
        person("p2", "Mary", Gender.FEMALE, "1952-07-15"),
        person("p3", "Sam", Gender.MALE, "1980-01-20", father_id="p1", mother_id="p2"),
    ]
    relationships = [spouse("r1", "p1", "p2")]
    return people, relationships


@pytest.fixture
def two_families():
    """
    Two lineages joined by a marriage.

    Arthur + Beth have Carl. Dan + Eve have Fay. Carl married Fay and they had
    Gus. Hal is unrelated and undated.
    """
    people = [
        person("a", "Arthur", Gender.MALE, "1900-05-01", last_name="Smith"),
        person("b", "Beth", Gender.FEMALE, "1903-02-11", last_name="Smith"),
        person("c", "Carl", Gender.MALE, "1925-09-09", father_id="a", mother_id="b", last_name="Smith"),
        person("d", "Dan", Gender.MALE, "1898-12-30", last_name="Jones"),
        person("e", "Eve", Gender.FEMALE, "1901-06-06", last_name="Jones"),
        person("f", "Fay", Gender.FEMALE, "1928-04-04", father_id="d", mother_id="e", last_name="Jones"),
        person("g", "Gus", Gender.MALE, "1950-10-10", father_id="c", mother_id="f", last_name="Smith"),
        person("h", "Hal", Gender.MALE),
    ]
    relationships = [
        spouse("r1", "a", "b"),
        spouse("r2", "d", "e"),
        spouse("r3", "c", "f"),
    ]
    return people, relationships
