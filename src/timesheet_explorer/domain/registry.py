"""Administrative registries: people, catalogs and servis labels.

The registries are plain in-memory repositories owned by a session.
Catalog edits cascade into the person registry but never into record
overrides, which keep whatever literal value was assigned.
"""

from typing import Iterable, Iterator, Optional

from loguru import logger

from timesheet_explorer.domain.entities import PersonEntry, TimesheetRecord
from timesheet_explorer.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    already_exists,
    name_required,
    not_found,
)

PERSON_ATTRIBUTES = ("team", "project", "role")


class PersonRegistry:
    """Person keys and their attributes, in insertion order.

    Insertion order matters: name matching returns the first registered key
    contained in a record's full name.
    """

    def __init__(self, people: Optional[dict[str, PersonEntry]] = None):
        self._people: dict[str, PersonEntry] = {}
        for name, entry in (people or {}).items():
            self._people[name] = PersonEntry(entry.team, entry.project, entry.role)

    def __iter__(self) -> Iterator[tuple[str, PersonEntry]]:
        return iter(list(self._people.items()))

    def __len__(self) -> int:
        return len(self._people)

    def __contains__(self, name: str) -> bool:
        return name in self._people

    def names(self) -> list[str]:
        return list(self._people)

    def get(self, name: str) -> Optional[PersonEntry]:
        return self._people.get(name)

    def add(
        self,
        name: str,
        team: Optional[str] = None,
        project: Optional[str] = None,
        role: Optional[str] = None,
    ) -> PersonEntry:
        """Register a new person.

        Raises:
            ValidationError: If name is blank
            ConflictError: If the person already exists
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError(name_required("person"))
        if name in self._people:
            raise ConflictError(already_exists("person", name))

        entry = PersonEntry(team=team or None, project=project or None, role=role or None)
        self._people[name] = entry
        return entry

    def update(
        self,
        name: str,
        team: Optional[str] = None,
        project: Optional[str] = None,
        role: Optional[str] = None,
    ) -> PersonEntry:
        """Replace a person's attributes; empty values clear them.

        Raises:
            NotFoundError: If the person is not registered
        """
        if name not in self._people:
            raise NotFoundError(not_found("person", name))
        entry = PersonEntry(team=team or None, project=project or None, role=role or None)
        self._people[name] = entry
        return entry

    def rename(self, old_name: str, new_name: str) -> None:
        """Rename a person key, keeping its position in the matching order."""
        new_name = (new_name or "").strip()
        if old_name not in self._people:
            raise NotFoundError(not_found("person", old_name))
        if not new_name:
            raise ValidationError(name_required("person"))
        if new_name == old_name:
            return
        if new_name in self._people:
            raise ConflictError(already_exists("person", new_name))

        self._people = {
            (new_name if key == old_name else key): entry
            for key, entry in self._people.items()
        }

    def delete(self, name: str) -> None:
        if name not in self._people:
            raise NotFoundError(not_found("person", name))
        del self._people[name]

    def as_dict(self) -> dict[str, PersonEntry]:
        return {name: PersonEntry(e.team, e.project, e.role) for name, e in self._people.items()}


class Catalog:
    """A set of unique team, project or role names.

    Values are kept sorted. Renames and deletes cascade to the matching
    attribute of every registered person.
    """

    def __init__(self, attribute: str, people: PersonRegistry, values: Iterable[str] = ()):
        if attribute not in PERSON_ATTRIBUTES:
            raise ValueError(f"Unknown person attribute '{attribute}'")
        self.attribute = attribute
        self.people = people
        self._values: list[str] = sorted(set(values))

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __contains__(self, value: str) -> bool:
        return value in self._values

    def values(self) -> list[str]:
        return list(self._values)

    def add(self, value: str) -> None:
        value = (value or "").strip()
        if not value:
            raise ValidationError(name_required(self.attribute))
        if value in self._values:
            raise ConflictError(already_exists(self.attribute, value))
        self._values.append(value)
        self._values.sort()

    def rename(self, old_value: str, new_value: str) -> int:
        """Rename a value and every person attribute pointing at it.

        Returns:
            Number of people updated
        """
        new_value = (new_value or "").strip()
        if old_value not in self._values:
            raise NotFoundError(not_found(self.attribute, old_value))
        if not new_value:
            raise ValidationError(name_required(self.attribute))
        if new_value != old_value and new_value in self._values:
            raise ConflictError(already_exists(self.attribute, new_value))

        self._values[self._values.index(old_value)] = new_value
        self._values.sort()
        updated = self._reassign(old_value, new_value)
        logger.debug(f"Renamed {self.attribute} '{old_value}' to '{new_value}' on {updated} people")
        return updated

    def delete(self, value: str) -> int:
        """Remove a value and clear it on every person referencing it.

        Returns:
            Number of people updated
        """
        if value not in self._values:
            raise NotFoundError(not_found(self.attribute, value))
        self._values.remove(value)
        updated = self._reassign(value, None)
        logger.debug(f"Deleted {self.attribute} '{value}', cleared on {updated} people")
        return updated

    def usage_count(self, value: str) -> int:
        return sum(1 for _, entry in self.people if getattr(entry, self.attribute) == value)

    def _reassign(self, old_value: str, new_value: Optional[str]) -> int:
        updated = 0
        for _, entry in self.people:
            if getattr(entry, self.attribute) == old_value:
                setattr(entry, self.attribute, new_value)
                updated += 1
        return updated


class ServisMapping:
    """Service code to display label mapping."""

    def __init__(self, mapping: Optional[dict[str, str]] = None):
        self._labels: dict[str, str] = dict(mapping or {})

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(sorted(self._labels.items()))

    def __len__(self) -> int:
        return len(self._labels)

    def set(self, code: str, label: str) -> None:
        """Set a label; a blank label removes the mapping."""
        code = (code or "").strip()
        if not code:
            raise ValidationError(name_required("servis code"))
        label = (label or "").strip()
        if label:
            self._labels[code] = label
        else:
            self._labels.pop(code, None)

    def remove(self, code: str) -> None:
        self._labels.pop(code, None)

    def label_for(self, code: str) -> Optional[str]:
        return self._labels.get(code)

    def display_name(self, code: str) -> str:
        """Render a code as ``"<code> - <label>"``, the raw code, or "-"."""
        if not code:
            return "-"
        label = self._labels.get(code)
        return f"{code} - {label}" if label else code

    def as_dict(self) -> dict[str, str]:
        return dict(self._labels)


def person_hours(name: str, records: Iterable[TimesheetRecord]) -> float:
    """Total hours on records whose full name contains the person key."""
    return sum(record.hours for record in records if name in record.full_name)
