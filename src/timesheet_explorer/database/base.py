"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from timesheet_explorer.domain.entities import DataBundle, SaveAck


class Database(ABC):
    """Abstract persistence interface for timesheet_explorer.

    Storage is bundle-oriented: the whole session is loaded and saved at
    once, and the core never depends on the storage technology.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def load_bundle(self) -> Optional[DataBundle]:
        """Load everything stored, or None when the store is empty."""
        pass

    @abstractmethod
    def save_bundle(self, bundle: DataBundle) -> SaveAck:
        """Replace everything stored with ``bundle``."""
        pass
