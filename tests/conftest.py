"""Shared pytest fixtures for timesheet_explorer tests."""

import os
import tempfile

import pytest
from click.testing import CliRunner

from timesheet_explorer.database.factories import create_sqlite_database
from timesheet_explorer.domain.entities import TimesheetRecord
from timesheet_explorer.domain.registry import PersonRegistry
from timesheet_explorer.domain.session import TimesheetSession

SAMPLE_CSV = (
    "Full name,Project Key,Activity Name,Issue Key,Issue summary,Issue Status,Hours,Work date,Servis\n"
    "Ana Kovac - Dev,ABC,Development,ABC-1,Login page,Done,4,2024-03-15 09:00:00,S1\n"
    'Ana Kovac - Dev,ABC,Review,ABC-2,"Fix ""quoted"" bug",In Progress,2.5,2024-03-18 10:00:00,S2\n'
    'Bor Novak,XYZ,Development,XYZ-7,"Multi\nline summary",Done,3,2024-04-02 08:00:00,\n'
    "Cene Zupan,XYZ,Meeting,XYZ-8,Standup,Done,1,2024-04-03 08:00:00,S1\n"
)


def _make_record(**fields) -> TimesheetRecord:
    """Build a record from keyword fields using the CSV column names."""
    columns = {
        "name": "Full name",
        "key": "Issue Key",
        "summary": "Issue summary",
        "status": "Issue Status",
        "activity": "Activity Name",
        "project_key": "Project Key",
        "hours": "Hours",
        "date": "Work date",
        "servis": "Servis",
        "epic": "Epic",
        "team": "Team",
        "project": "Project",
    }
    return TimesheetRecord(fields={columns.get(k, k): v for k, v in fields.items()})


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def people():
    """Registry with Ana (Core/Alpha/Developer) and Bor (Ops, no project)."""
    registry = PersonRegistry()
    registry.add("Ana Kovac", team="Core", project="Alpha", role="Developer")
    registry.add("Bor Novak", team="Ops", role="Tester")
    return registry


@pytest.fixture
def sample_records():
    return [
        _make_record(name="Ana Kovac - Dev", key="ABC-1", hours="4", date="2024-03-15 09:00:00", activity="Development", status="Done", project_key="ABC", servis="S1", summary="Login page"),
        _make_record(name="Ana Kovac - Dev", key="ABC-2", hours="2.5", date="2024-03-18 10:00:00", activity="Review", status="In Progress", project_key="ABC", servis="S2", summary="Fix bug"),
        _make_record(name="Bor Novak", key="XYZ-7", hours="3", date="2024-04-02 08:00:00", activity="Development", status="Done", project_key="XYZ", summary="Deploy"),
        _make_record(name="Cene Zupan", key="XYZ-8", hours="1", date="2024-04-03 08:00:00", activity="Meeting", status="Done", project_key="XYZ", servis="S1", summary="Standup"),
    ]


@pytest.fixture
def session(people, sample_records):
    """Session with catalogs, people and the sample records."""
    return TimesheetSession(
        people=people,
        projects=["Alpha", "Beta"],
        teams=["Core", "Ops"],
        roles=["Developer", "Tester"],
        records=sample_records,
    )


@pytest.fixture
def sample_csv(tmp_path):
    path = tmp_path / "timesheet.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")
    return path


@pytest.fixture
def cli_runner(temp_db):
    """Run CLI commands against the temporary database."""
    from timesheet_explorer.cli.main import cli

    runner = CliRunner()

    def invoke(*args, **kwargs):
        return runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)

    return invoke


@pytest.fixture
def make_record():
    """Factory building a TimesheetRecord from short field names."""
    return _make_record
