"""CLI error reporting."""

from typing import NoReturn

import click
from loguru import logger

from timesheet_explorer.domain.errors import DomainError


def fail(ctx: click.Context, message) -> NoReturn:
    """Print ``Error: <message>`` to stderr and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def handle_domain_error(ctx: click.Context, error: DomainError) -> NoReturn:
    """Report a rejected registry, record or overlay operation."""
    logger.debug(f"{ctx.command_path} rejected: {type(error).__name__}: {error}")
    fail(ctx, error)
