"""Administrative data interchange (projects, teams, roles, people)."""

import json
from typing import Any

from loguru import logger

from timesheet_explorer.domain.attribution import short_display_name
from timesheet_explorer.domain.csv_import import parse_document
from timesheet_explorer.domain.entities import PersonEntry
from timesheet_explorer.domain.errors import ValidationError
from timesheet_explorer.domain.registry import Catalog, PersonRegistry
from timesheet_explorer.domain.session import TimesheetSession


def export_admin_data(session: TimesheetSession) -> dict[str, Any]:
    """Build the administrative interchange document for a session."""
    return {
        "projects": session.projects.values(),
        "teams": session.teams.values(),
        "roles": session.roles.values(),
        "people": {
            name: {"team": entry.team, "project": entry.project, "role": entry.role}
            for name, entry in session.people
        },
    }


def export_admin_json(session: TimesheetSession) -> str:
    return json.dumps(export_admin_data(session), indent=2, ensure_ascii=False)


def import_admin_data(session: TimesheetSession, data: dict[str, Any]) -> None:
    """Replace the session's catalogs and people with an interchange document.

    Missing keys are treated as empty. Timesheet records and servis labels
    are left alone.

    Raises:
        ValidationError: If the document does not have the expected shape
    """
    if not isinstance(data, dict):
        raise ValidationError("Administrative data must be a JSON object")

    people_data = data.get("people") or {}
    if not isinstance(people_data, dict):
        raise ValidationError("'people' must be an object keyed by name")

    people = {}
    for name, attributes in people_data.items():
        attributes = attributes or {}
        if not isinstance(attributes, dict):
            raise ValidationError(f"Attributes for '{name}' must be an object")
        people[name] = PersonEntry(
            team=attributes.get("team") or None,
            project=attributes.get("project") or None,
            role=attributes.get("role") or None,
        )

    projects = _string_list(data, "projects")
    teams = _string_list(data, "teams")
    roles = _string_list(data, "roles")

    session.people = PersonRegistry(people)
    session.projects = Catalog("project", session.people, projects)
    session.teams = Catalog("team", session.people, teams)
    session.roles = Catalog("role", session.people, roles)
    logger.info(
        f"Imported {len(session.people)} people, {len(session.projects)} projects, "
        f"{len(session.teams)} teams, {len(session.roles)} roles"
    )


def import_admin_json(session: TimesheetSession, text: str) -> None:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Invalid JSON: {e}")
    import_admin_data(session, data)


def import_people_from_csv(text: str, people: PersonRegistry) -> int:
    """Register the short display name of every unknown ``Full name``.

    Returns:
        Number of people added
    """
    records, _ = parse_document(text)
    imported = 0
    for record in records:
        name = short_display_name(record.full_name)
        if name and name not in people:
            people.add(name)
            imported += 1
    return imported


def _string_list(data: dict[str, Any], key: str) -> list[str]:
    values = data.get(key) or []
    if not isinstance(values, list):
        raise ValidationError(f"'{key}' must be a list of names")
    return [str(v) for v in values if v]
