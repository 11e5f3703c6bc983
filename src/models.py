"""Data classes for family tree entities and the layout arena."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum


class Gender(Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    UNKNOWN = "unknown"


class RelationshipKind(Enum):
    """Spousal relationship kinds. Parent/child links live on PersonRecord."""

    SPOUSE = "spouse"
    PARTNER = "partner"
    DIVORCED = "divorced"
    SEPARATED = "separated"


@dataclass(frozen=True)
class PersonRecord:
    id: str
    first_name: str
    last_name: str | None = None
    gender: Gender = Gender.UNKNOWN
    birth_date: str | None = None  # ISO format YYYY-MM-DD or None
    father_id: str | None = None
    mother_id: str | None = None
    death_date: str | None = None  # ISO format YYYY-MM-DD or None
    maiden_name: str | None = None
    nickname: str | None = None

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p).strip()

    @property
    def is_living(self) -> bool:
        return self.death_date is None

    @property
    def birth_year(self) -> int | None:
        if not self.birth_date:
            return None
        return int(self.birth_date[:4])

    def age(self, on: date | None = None) -> int | None:
        """Age in whole years at death, or on `on` (default today) while living."""
        if not self.birth_date:
            return None
        try:
            born = date.fromisoformat(self.birth_date)
            if self.death_date:
                end = date.fromisoformat(self.death_date)
            else:
                end = on or date.today()
        except ValueError:
            return None
        years = end.year - born.year
        if (end.month, end.day) < (born.month, born.day):
            years -= 1
        return years


@dataclass(frozen=True)
class RelationshipRecord:
    id: str
    person1_id: str
    person2_id: str
    relationship_type: RelationshipKind = RelationshipKind.SPOUSE
    start_date: str | None = None
    end_date: str | None = None

    @property
    def is_current(self) -> bool:
        return self.end_date is None


@dataclass(slots=True, eq=False)
class LayoutNode:
    """
    One person plus the computed child and spouse collections.

    Collections hold references to other canonical nodes in the same
    FamilyGraph; a node may be referenced from several places but exists once.
    """

    person: PersonRecord
    children: list["LayoutNode"] = field(default_factory=list)
    spouses: list["LayoutNode"] = field(default_factory=list)
    spouse_kinds: list[RelationshipKind] = field(default_factory=list)

    @property
    def id(self) -> str:
        return self.person.id

    @property
    def has_spouses(self) -> bool:
        return bool(self.spouses)

    def __repr__(self) -> str:
        return (
            f"LayoutNode({self.id!r}, children={[c.id for c in self.children]}, "
            f"spouses={[s.id for s in self.spouses]})"
        )


@dataclass
class FamilyGraph:
    """Arena of LayoutNodes keyed by person id, in input order."""

    nodes: dict[str, LayoutNode] = field(default_factory=dict)
    relationships: list[RelationshipRecord] = field(default_factory=list)
    skipped_relationships: list[RelationshipRecord] = field(default_factory=list)

    def __contains__(self, person_id: object) -> bool:
        return person_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self):
        return iter(self.nodes.values())

    def __getitem__(self, person_id: str) -> LayoutNode:
        return self.nodes[person_id]

    def parents_of(self, person_id: str) -> list[LayoutNode]:
        """In-data father and mother of a person (missing ids are ignored)."""
        person = self.nodes[person_id].person
        parents = []
        for parent_id in (person.father_id, person.mother_id):
            if parent_id and parent_id != person_id and parent_id in self.nodes:
                node = self.nodes[parent_id]
                if node not in parents:
                    parents.append(node)
        return parents

    def neighbours(self, person_id: str) -> list[LayoutNode]:
        """Parents, children and spouses: the undirected family edges."""
        node = self.nodes[person_id]
        return [*self.parents_of(person_id), *node.children, *node.spouses]


@dataclass
class Forest:
    graph: FamilyGraph = field(default_factory=FamilyGraph)
    roots: list[LayoutNode] = field(default_factory=list)
    components: list[list[str]] = field(default_factory=list)
    coverage: dict[str, str] = field(default_factory=dict)  # person id -> root id
    degraded_components: list[int] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.roots)

    @property
    def root_ids(self) -> list[str]:
        return [r.id for r in self.roots]
