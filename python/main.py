#!/usr/bin/env python3
"""Sliding Puzzle Game.

Usage::

    python main.py                    # interactive menu
    python main.py -f rich -s 3       # Rich terminal, 3×3
    python main.py -f pygame --image pics/forest.png
    python main.py --board 1,2,3,4,5,6,7,0,8   # start from a given position
    python main.py --scores           # view high scores
"""

import importlib
import logging
import math
import sys
from enum import StrEnum
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

ROOT = Path(__file__).resolve().parent  # python/
PROJECT_ROOT = ROOT.parent
DATA_DIR = PROJECT_ROOT / "data"

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from backend.engine.gamegenerator import GameGenerator  # noqa: E402
from backend.models.board import EMPTY, Board  # noqa: E402
from backend.models.highscore import HighScoreManager  # noqa: E402
from backend.models.settings import MAX_SIZE, MIN_SIZE, Settings, SettingsStore  # noqa: E402

logger = logging.getLogger(__name__)


# -- frontend registry -------------------------------------------------------


class Frontend(StrEnum):
    rich = "rich"
    pygame = "pygame"


_RUNNERS = {
    Frontend.rich: "frontend.cli.rich.app",
    Frontend.pygame: "frontend.gui.pygame.app",
}


# -- helpers ------------------------------------------------------------------


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
    )


def _print_highscores() -> None:
    from frontend.cli.rich.app import scores_table

    manager = HighScoreManager(DATA_DIR / "highscores.json")
    console = Console()
    if not manager.get_scores():
        console.print("\n  No high scores yet.\n", style="dim")
        return
    console.print()
    console.print(scores_table(manager))
    console.print()


def _parse_board(text: str) -> Board:
    """Read a row-major cell list such as ``1,2,3,4,5,6,7,0,8`` (0 is the gap)."""
    try:
        values = [int(part) for part in text.split(",")]
    except ValueError:
        raise typer.BadParameter(
            "cells must be comma-separated integers", param_hint="'--board'"
        ) from None

    size = math.isqrt(len(values))
    if size * size != len(values) or not MIN_SIZE <= size <= MAX_SIZE:
        raise typer.BadParameter(
            f"expected a square board of {MIN_SIZE}-{MAX_SIZE} per side, "
            f"got {len(values)} cells",
            param_hint="'--board'",
        )
    try:
        board = Board.from_flat(size, [EMPTY if v == 0 else v for v in values])
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="'--board'") from e
    if not GameGenerator.is_solvable(board):
        raise typer.BadParameter(
            "this position cannot be solved", param_hint="'--board'"
        )
    return board


def _launch(frontend: Frontend, settings: Settings, board: Board | None = None) -> None:
    logger.info("Launching %s frontend", frontend.value)
    mod = importlib.import_module(_RUNNERS[frontend])
    mod.run(settings=settings, data_dir=DATA_DIR, board=board)


def _menu_loop(settings: Settings) -> None:
    while True:
        print()
        print("  ====================================")
        print("       S L I D I N G   P U Z Z L E    ")
        print("  ====================================")
        print()
        print("  1.  Play  (Rich Terminal)")
        print("  2.  Play  (Pygame GUI)")
        print("  3.  View High Scores")
        print("  0.  Quit")
        print()

        choice = input("  Select: ").strip()

        if choice == "0":
            print("\n  Goodbye!\n")
            return
        elif choice == "1":
            _launch(Frontend.rich, settings)
        elif choice == "2":
            _launch(Frontend.pygame, settings)
        elif choice == "3":
            _print_highscores()
        else:
            print("  Unknown option.")


# -- CLI entry point ----------------------------------------------------------

app = typer.Typer(add_completion=False)


@app.command()
def main(
    frontend: Optional[Frontend] = typer.Option(
        None, "-f", "--frontend",
        help="Frontend to launch. Omit for interactive menu.",
    ),
    size: Optional[int] = typer.Option(
        None, "-s", "--size",
        min=MIN_SIZE, max=MAX_SIZE,
        help=f"Grid size ({MIN_SIZE}-{MAX_SIZE}). Defaults to the saved size.",
    ),
    image: Optional[Path] = typer.Option(
        None, "--image",
        exists=True, dir_okay=False,
        help="Picture to cut into tiles (Pygame only).",
    ),
    dark: Optional[bool] = typer.Option(
        None, "--dark/--light",
        help="Colour theme. Defaults to the saved theme.",
    ),
    board: Optional[str] = typer.Option(
        None, "--board", metavar="CELLS",
        help="Start from this position, e.g. 1,2,3,4,5,6,7,0,8 (0 is the gap).",
    ),
    scores: bool = typer.Option(
        False, "--scores",
        help="Show high scores and exit.",
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose",
        help="Log debug output to stderr.",
    ),
) -> None:
    """Sliding Puzzle Game."""
    _setup_logging(verbose)

    if scores:
        _print_highscores()
        return

    start = _parse_board(board) if board is not None else None

    store = SettingsStore(DATA_DIR / "settings.json")
    settings = store.load()
    if size is not None:
        settings.grid_size = size
    if start is not None:
        settings.grid_size = start.size
    if image is not None:
        settings.image = str(image.resolve())
    if dark is not None:
        settings.dark_mode = dark
    store.save(settings)

    if start is not None:
        _launch(frontend or Frontend.rich, settings, start)
        return

    if frontend is None:
        _menu_loop(settings)
        return

    _launch(frontend, settings)


if __name__ == "__main__":
    app()
