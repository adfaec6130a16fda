"""
CLI entry point using Typer.

Provides commands for the 28-day program:
- generate: Build and save a new program
- preview: Show the weekly rotation without generating
- show / day / today: Display the calendar and single days
- complete / skip / uncomplete: Log progress for a whole day
- complete-exercise / skip-exercise: Log progress for one exercise
- stats: Progress statistics
- reset: Erase the stored program
"""

import logging
from typing import Annotated

import typer

from .app import app
from .commands import program, progress  # noqa: F401  registers commands on app


@app.callback()
def main_callback(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug log messages"),
    ] = False,
) -> None:
    """
    Periodized 28-day workout program generator and progress tracker.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


if __name__ == "__main__":
    app()
