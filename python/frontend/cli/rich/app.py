"""Rich terminal frontend — tables, colours, and panels.

Arrow keys slide the tile next to the blank; the clock starts on the first
move and the result is ranked on the score list when the board is solved.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import rich.box
from rich.align import Align
from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from backend.engine.gameplay import GameSession
from backend.models.board import EMPTY, Board, Direction
from backend.models.highscore import HighScoreManager
from backend.models.settings import MAX_SIZE, MIN_SIZE, Settings, SettingsStore
from frontend.cli.input_handler import get_key, get_key_timeout

logger = logging.getLogger(__name__)

console = Console()

_THEMES: dict[bool, dict[str, str]] = {
    # dark_mode -> styles
    False: {
        "border": "bright_blue",
        "tile": "bold white",
        "movable": "bold cyan",
        "correct": "bold green",
        "accent": "bold yellow",
    },
    True: {
        "border": "magenta",
        "tile": "bold bright_white",
        "movable": "bold bright_magenta",
        "correct": "bold bright_green",
        "accent": "bold bright_yellow",
    },
}

_DIRECTIONS = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


# -- helpers ------------------------------------------------------------------


def format_time(seconds: int) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m}:{s:02d}"


def _stats(session: GameSession, theme: dict[str, str]) -> Text:
    stats = Text()
    stats.append("  Moves: ", style="dim")
    stats.append(str(session.moves), style=theme["accent"])
    stats.append("    Time: ", style="dim")
    stats.append(format_time(session.elapsed_seconds), style=theme["accent"])
    return stats


# -- board rendering ----------------------------------------------------------


def render_board(board: Board, movable: set[int], theme: dict[str, str]) -> Table:
    """Return a Rich Table representing the puzzle grid."""
    width = len(str(board.cell_count - 1))
    table = Table(
        show_header=False,
        show_edge=True,
        pad_edge=True,
        box=rich.box.HEAVY,
        border_style=theme["border"],
        padding=(0, 1),
    )
    for _ in range(board.size):
        table.add_column(width=width + 1, justify="center")

    for r in range(board.size):
        cells: list[str] = []
        for c in range(board.size):
            i = board.index_of(r, c)
            val = board.cells[i]
            if val is EMPTY:
                cells.append("[dim]·[/dim]")
                continue
            if i in movable:
                style = theme["movable"]
            elif board.is_tile_correct(i):
                style = theme["correct"]
            else:
                style = theme["tile"]
            cells.append(f"[{style}]{val:>{width}}[/{style}]")
        table.add_row(*cells)

    return table


# -- screens ------------------------------------------------------------------


def _draw_menu(settings: Settings) -> None:
    console.clear()
    theme = _THEMES[settings.dark_mode]

    sizes = Text()
    for s in range(MIN_SIZE, MAX_SIZE + 1):
        if s > MIN_SIZE:
            sizes.append("  ")
        if s == settings.grid_size:
            sizes.append(f" {s}×{s} ", style="bold green on #313244")
        else:
            sizes.append(f" {s}×{s} ", style="dim")

    nav = Text("  ← →  change size", style="dim")

    opts = Text()
    opts.append("  1", style="bold cyan")
    opts.append("  Play    ")
    opts.append("2", style="dim bold")
    opts.append("  Scores    ", style="dim")
    opts.append("T", style="dim bold")
    opts.append(f"  {'Light' if settings.dark_mode else 'Dark'}    ", style="dim")
    opts.append("Q", style="dim bold")
    opts.append("  Quit", style="dim")

    body = Group(
        Text(""),
        Align.center(sizes),
        Align.center(nav),
        Text(""),
        Align.center(opts),
        Text(""),
    )
    panel = Panel(
        body,
        title="[bold]S L I D I N G   P U Z Z L E[/bold]",
        border_style=theme["border"],
        padding=(1, 4),
    )
    console.print()
    console.print(Align.center(panel))


def _draw_game(session: GameSession, theme: dict[str, str]) -> None:
    console.clear()
    size = session.size
    board_table = render_board(session.board, set(session.movable()), theme)

    controls = Text()
    controls.append("  ↑↓←→", style="bold cyan")
    controls.append(" / ", style="dim")
    controls.append("WASD", style="bold cyan")
    controls.append("  slide   ", style="dim")
    controls.append("N", style="bold cyan")
    controls.append("  new board   ", style="dim")
    controls.append("Q", style="bold cyan")
    controls.append("  back", style="dim")

    panel = Panel(
        Align.center(board_table),
        title=f"[bold cyan]Sliding Puzzle  {size}×{size}[/bold cyan]",
        border_style=theme["border"],
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    # Save the cursor so _update_time() can repaint just the stats line.
    sys.stdout.write("\033[s")
    sys.stdout.flush()
    console.print(Align.center(_stats(session, theme)))
    console.print(Align.center(controls))


def _update_time(session: GameSession) -> None:
    """Overwrite only the stats line using the saved cursor position."""
    _DIM = "\033[2m"
    _YB = "\033[33;1m"
    _RS = "\033[0m"

    clock = format_time(session.elapsed_seconds)
    stats_raw = (
        f"{_DIM}Moves: {_RS}{_YB}{session.moves}{_RS}"
        f"    {_DIM}Time: {_RS}{_YB}{clock}{_RS}"
    )
    visible_len = len(f"Moves: {session.moves}    Time: {clock}")
    pad = max(0, (console.width - visible_len) // 2)

    sys.stdout.write(f"\033[u\033[K{' ' * pad}{stats_raw}")
    sys.stdout.flush()


def _draw_win(session: GameSession, theme: dict[str, str]) -> None:
    console.clear()
    size = session.size

    congrats = Text()
    congrats.append("\n  ★ ", style="bold yellow")
    congrats.append("CONGRATULATIONS!", style="bold green")
    congrats.append("  You solved it!  ", style="green")
    congrats.append("★\n", style="bold yellow")

    group = Group(
        Align.center(render_board(session.board, set(), theme)),
        Align.center(congrats),
        Align.center(_stats(session, theme)),
    )
    panel = Panel(
        group,
        title=f"[bold green]Sliding Puzzle  {size}×{size}[/bold green]",
        border_style="bold green",
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))


def scores_table(manager: HighScoreManager) -> Table:
    """Ranked score list as a Rich table."""
    table = Table(
        title="Best results",
        title_style="bold cyan",
        box=rich.box.ROUNDED,
        border_style="dim",
    )
    table.add_column("#", justify="right", style="dim", width=3)
    table.add_column("Grid", justify="center")
    table.add_column("Moves", justify="right", style="yellow")
    table.add_column("Time", justify="right", style="yellow")
    table.add_column("Date", style="dim")

    for i, e in enumerate(manager.get_scores(), 1):
        table.add_row(
            str(i),
            f"{e.grid_size}×{e.grid_size}",
            str(e.moves),
            format_time(e.time),
            e.date[:10],
        )
    return table


def _draw_highscores(manager: HighScoreManager, theme: dict[str, str]) -> None:
    console.clear()
    if manager.get_scores():
        body = Align.center(scores_table(manager))
    else:
        body = Align.center(Text("  No high scores yet.", style="dim"))

    panel = Panel(
        body,
        title="[bold]HIGH  SCORES[/bold]",
        border_style=theme["border"],
        padding=(1, 2),
    )
    console.print()
    console.print(Align.center(panel))
    console.print(Align.center(Text("\n  Press any key to go back.\n", style="dim")))
    get_key()


# -- game loop ----------------------------------------------------------------


def _play_game(
    settings: Settings, manager: HighScoreManager, board: Board | None = None
) -> None:
    theme = _THEMES[settings.dark_mode]
    if board is not None:
        session = GameSession.from_board(board)
    else:
        session = GameSession(settings.grid_size)

    while True:
        while not session.is_won:
            _draw_game(session, theme)

            # Poll with a timeout so the clock keeps ticking.
            while True:
                key = get_key_timeout(0.5)
                if key is not None:
                    break
                _update_time(session)

            if key in _DIRECTIONS:
                session.move(_DIRECTIONS[key])
            elif key == "new":
                session.new_game()
            elif key == "quit":
                return

        _draw_win(session, theme)
        manager.add_score(session.score_entry())

        console.print(
            Align.center(
                Text("\n  Press N to play again, Q to go back.\n", style="dim")
            )
        )
        while True:
            key = get_key()
            if key in ("new", "enter"):
                session.new_game()
                break
            if key == "quit":
                return


# -- menu loop ----------------------------------------------------------------


def _menu_loop(data_dir: Path, settings: Settings, board: Board | None = None) -> None:
    store = SettingsStore(data_dir / "settings.json")
    manager = HighScoreManager(data_dir / "highscores.json")

    if board is not None:
        _play_game(settings, manager, board)

    while True:
        _draw_menu(settings)
        key = get_key()

        if key == "quit":
            console.clear()
            console.print(Align.center(Text("\nGoodbye!\n", style="bold cyan")))
            return
        elif key in ("left", "right"):
            step = -1 if key == "left" else 1
            settings.grid_size = min(MAX_SIZE, max(MIN_SIZE, settings.grid_size + step))
            store.save(settings)
        elif key == "theme":
            settings.dark_mode = not settings.dark_mode
            store.save(settings)
        elif key in ("1", "enter"):
            _play_game(settings, manager)
        elif key == "2":
            _draw_highscores(manager, _THEMES[settings.dark_mode])


# -- public entry point -------------------------------------------------------


def run(settings: Settings, data_dir: Path, board: Board | None = None) -> None:
    """Launch the Rich CLI with interactive menu.

    With *board*, that position is played first and the menu follows.
    """
    logger.debug("Starting Rich frontend with %s", settings)
    _menu_loop(data_dir, settings, board)
