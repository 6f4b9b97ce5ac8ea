"""Explicit session object holding registries and timesheet records.

A session replaces application-wide state: every pipeline call takes its
registries from the session it was built from, so independent sessions
never interfere with each other.
"""

from typing import TYPE_CHECKING, Iterable, Optional

from loguru import logger

from timesheet_explorer.domain.attribution import AttributionResolver
from timesheet_explorer.domain.entities import (
    DataBundle,
    Overrides,
    SaveAck,
    TimesheetRecord,
)
from timesheet_explorer.domain.errors import NotFoundError, not_found
from timesheet_explorer.domain.filters import FilterEngine
from timesheet_explorer.domain.registry import Catalog, PersonRegistry, ServisMapping
from timesheet_explorer.domain.summary import Aggregator
from timesheet_explorer.domain.time_buckets import TimeBucketer

if TYPE_CHECKING:
    from timesheet_explorer.database.base import Database


class TimesheetSession:
    """Registries plus the current record set."""

    def __init__(
        self,
        people: Optional[PersonRegistry] = None,
        projects: Iterable[str] = (),
        teams: Iterable[str] = (),
        roles: Iterable[str] = (),
        servis: Optional[ServisMapping] = None,
        records: Optional[list[TimesheetRecord]] = None,
    ):
        self.people = people if people is not None else PersonRegistry()
        self.projects = Catalog("project", self.people, projects)
        self.teams = Catalog("team", self.people, teams)
        self.roles = Catalog("role", self.people, roles)
        self.servis = servis if servis is not None else ServisMapping()
        self.records: list[TimesheetRecord] = list(records or [])

    def catalog(self, attribute: str) -> Catalog:
        """Return the catalog for "project", "team" or "role"."""
        catalogs = {"project": self.projects, "team": self.teams, "role": self.roles}
        if attribute not in catalogs:
            raise ValueError(f"Unknown catalog '{attribute}'")
        return catalogs[attribute]

    def check_attributes(self, **values: Optional[str]) -> None:
        """Ensure each given team/project/role value exists in its catalog.

        Raises:
            NotFoundError: If a non-empty value is not registered
        """
        for attribute, value in values.items():
            if value and value not in self.catalog(attribute):
                raise NotFoundError(not_found(attribute, value))

    def resolver(self) -> AttributionResolver:
        return AttributionResolver(self.people)

    def filter_engine(self) -> FilterEngine:
        return FilterEngine(self.resolver())

    def aggregator(self) -> Aggregator:
        return Aggregator(self.resolver(), self.servis)

    def bucketer(self) -> TimeBucketer:
        return TimeBucketer(self.aggregator())

    def replace_records(self, records: Iterable[TimesheetRecord]) -> int:
        """Commit an import, replacing the whole record set."""
        self.records = list(records)
        logger.info(f"Session now holds {len(self.records)} timesheet records")
        return len(self.records)

    def clear_records(self) -> int:
        """Delete every record. Returns the number removed."""
        removed = len(self.records)
        self.records = []
        logger.info(f"Cleared {removed} timesheet records")
        return removed

    def to_bundle(self) -> DataBundle:
        return DataBundle(
            projects=self.projects.values(),
            teams=self.teams.values(),
            roles=self.roles.values(),
            people=self.people.as_dict(),
            servis_mapping=self.servis.as_dict(),
            records=[
                TimesheetRecord(
                    fields=record.fields,
                    overrides=(
                        Overrides(record.overrides.team, record.overrides.project)
                        if record.overrides is not None
                        else None
                    ),
                )
                for record in self.records
            ],
        )

    @classmethod
    def from_bundle(cls, bundle: Optional[DataBundle]) -> "TimesheetSession":
        if bundle is None:
            return cls()
        return cls(
            people=PersonRegistry(bundle.people),
            projects=bundle.projects,
            teams=bundle.teams,
            roles=bundle.roles,
            servis=ServisMapping(bundle.servis_mapping),
            records=bundle.records,
        )


def load_session(db: "Database") -> TimesheetSession:
    """Load a session from storage; an empty store yields an empty session."""
    bundle = db.load_bundle()
    session = TimesheetSession.from_bundle(bundle)
    logger.debug(
        f"Loaded session: {len(session.records)} records, {len(session.people)} people"
    )
    return session


def save_session(session: TimesheetSession, db: "Database") -> SaveAck:
    """Persist a session and return the storage acknowledgement."""
    ack = db.save_bundle(session.to_bundle())
    logger.debug(f"Saved session: {ack.records} records, {ack.people} people")
    return ack
