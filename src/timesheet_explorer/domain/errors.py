"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def name_required(kind: str) -> str:
    """Return message for a blank name."""
    return f"{kind.capitalize()} name is required"


def already_exists(kind: str, name: str) -> str:
    """Return message for a duplicate registry entry."""
    return f"{kind.capitalize()} '{name}' already exists"


def not_found(kind: str, name: str) -> str:
    """Return message for a missing registry entry."""
    return f"{kind.capitalize()} '{name}' not found"


def unknown_choice(kind: str, value: str, choices) -> str:
    """Return message for a value outside a fixed set of choices."""
    return f"Unknown {kind} '{value}'. Must be one of: {', '.join(choices)}"
