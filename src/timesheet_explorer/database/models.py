"""SQLAlchemy models for timesheet_explorer database."""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Integer,
    String,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class CatalogEntry(Base):
    """Project, team or role name."""

    __tablename__ = "catalog_entries"

    id = Column(Integer, primary_key=True)
    kind = Column(String, nullable=False)
    name = Column(String, nullable=False)

    __table_args__ = (UniqueConstraint("kind", "name", name="uq_catalog_kind_name"),)


class Person(Base):
    """Registered person and attributes; position keeps matching order."""

    __tablename__ = "people"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    team = Column(String, nullable=True)
    project = Column(String, nullable=True)
    role = Column(String, nullable=True)
    position = Column(Integer, nullable=False)


class ServisLabel(Base):
    """Display label for a servis code."""

    __tablename__ = "servis_mappings"

    code = Column(String, primary_key=True)
    label = Column(String, nullable=False)


class TimesheetRow(Base):
    """Imported timesheet row with its override annotation."""

    __tablename__ = "timesheet_records"

    id = Column(Integer, primary_key=True)
    position = Column(Integer, nullable=False)
    fields = Column(JSON, nullable=False)
    has_overrides = Column(Boolean, default=False, nullable=False)
    override_team = Column(String, nullable=True)
    override_project = Column(String, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
