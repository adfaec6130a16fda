"""Shared Typer app object, shared option types, and tracker utility."""

from pathlib import Path
from typing import Annotated, Optional

import typer

from ..core.catalog.registry import CatalogError, get_data_dir, get_default_catalog
from ..core.tracker import ProgramTracker
from ..io.program_store import get_default_store
from . import views

DEFAULT_USER = "local"

# Shared --user option type used across all commands
UserOption = Annotated[
    str,
    typer.Option("--user", "-u", help="User ID the program belongs to"),
]

# Shared --data-dir option type used across all commands
DataDirOption = Annotated[
    Optional[Path],
    typer.Option("--data-dir", "-d", help="Data directory (default: $FITPLAN_HOME or ~/.fitplan)"),
]

JsonOption = Annotated[
    bool,
    typer.Option("--json", "-j", help="Output as JSON for machine processing"),
]

app = typer.Typer(
    name="fitplan",
    help="Periodized 28-day workout program generator and progress tracker.",
    no_args_is_help=True,
)


def get_tracker(user: str, data_dir: Path | None, with_catalog: bool = False) -> ProgramTracker:
    """
    Build a tracker for ``user`` and load any stored program.

    The exercise catalog is only loaded when ``with_catalog`` is set, since
    only generation needs it.
    """
    base = data_dir if data_dir is not None else get_data_dir()
    catalog = None
    if with_catalog:
        try:
            catalog = get_default_catalog(base)
        except CatalogError as e:
            views.print_error(str(e))
            raise typer.Exit(1)

    tracker = ProgramTracker(get_default_store(user, base), catalog=catalog)
    tracker.load()
    return tracker


def require_program(tracker: ProgramTracker) -> None:
    """Exit with an error if the tracker has no program loaded."""
    if tracker.program is None:
        views.print_error(f"No program found for user '{tracker.store.user_id}'.")
        views.print_info("Run 'generate' first to create a 28-day program.")
        raise typer.Exit(1)
