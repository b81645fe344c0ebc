"""Pygame GUI frontend — click a tile next to the gap to slide it.

Includes a menu with size and theme selection, gameplay with optional
picture tiles, the win screen, and the score list.
"""

from __future__ import annotations

import enum
import logging
from pathlib import Path

import pygame

from backend.engine.gamelayout import crop_box, index_at, tile_rect
from backend.engine.gameplay import GameSession
from backend.models.board import EMPTY, Board, Direction
from backend.models.highscore import HighScoreManager
from backend.models.settings import MAX_SIZE, MIN_SIZE, Settings, SettingsStore

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catppuccin palettes (Mocha for dark, Latte for light)
# ---------------------------------------------------------------------------
_PALETTES: dict[bool, dict[str, tuple[int, int, int]]] = {
    True: {
        "base": (30, 30, 46),
        "mantle": (24, 24, 37),
        "surface0": (49, 50, 68),
        "surface1": (69, 71, 90),
        "overlay": (108, 112, 134),
        "text": (205, 214, 244),
        "subtext": (166, 173, 200),
        "blue": (137, 180, 250),
        "green": (166, 227, 161),
        "pink": (245, 194, 231),
        "yellow": (249, 226, 175),
        "red": (243, 139, 168),
    },
    False: {
        "base": (239, 241, 245),
        "mantle": (220, 224, 232),
        "surface0": (204, 208, 218),
        "surface1": (188, 192, 204),
        "overlay": (140, 143, 161),
        "text": (76, 79, 105),
        "subtext": (92, 95, 119),
        "blue": (30, 102, 245),
        "green": (64, 160, 43),
        "pink": (234, 118, 203),
        "yellow": (223, 142, 29),
        "red": (210, 15, 57),
    },
}

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------
WIN_W, WIN_H = 500, 640
TILE_GAP = 4
MARGIN = 20
BOARD_MAX = WIN_W - 2 * MARGIN  # max board width/height in px
BOARD_TOP = 76


class _Screen(enum.Enum):
    MENU = "menu"
    PLAYING = "playing"
    WIN = "win"
    SCORES = "scores"


# ---------------------------------------------------------------------------
# Simple clickable button
# ---------------------------------------------------------------------------
class _Btn:
    __slots__ = ("rect", "text", "font", "role", "_hot")

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        font: pygame.font.Font,
        role: str = "surface0",
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self.font = font
        self.role = role
        self._hot = False

    def draw(self, surf: pygame.Surface, pal: dict[str, tuple[int, int, int]]) -> None:
        filled = self.role != "surface0"
        bg = pal[self.role] if not self._hot or filled else pal["surface1"]
        pygame.draw.rect(surf, bg, self.rect, border_radius=8)
        if self._hot and filled:
            pygame.draw.rect(surf, pal["text"], self.rect, width=2, border_radius=8)
        lbl = self.font.render(self.text, True, pal["base"] if filled else pal["text"])
        surf.blit(
            lbl,
            (
                self.rect.centerx - lbl.get_width() // 2,
                self.rect.centery - lbl.get_height() // 2,
            ),
        )

    def motion(self, pos: tuple[int, int]) -> None:
        self._hot = self.rect.collidepoint(pos)

    def hit(self, pos: tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)


def _cx(w: int) -> int:
    return (WIN_W - w) // 2


def _blit_center(surf: pygame.Surface, rendered: pygame.Surface, y: int) -> None:
    surf.blit(rendered, (_cx(rendered.get_width()), y))


def _fmt(seconds: int) -> str:
    m, s = divmod(int(seconds), 60)
    return f"{m}:{s:02d}"


_KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}


# ---------------------------------------------------------------------------
# Main application
# ---------------------------------------------------------------------------
class PygameApp:
    def __init__(
        self, settings: Settings, data_dir: Path, board: Board | None = None
    ) -> None:
        self._settings = settings
        self._store = SettingsStore(data_dir / "settings.json")
        self._hs = HighScoreManager(data_dir / "highscores.json")
        self._tile_images: dict[int, pygame.Surface] = {}

        pygame.init()
        self._surf = pygame.display.set_mode((WIN_W, WIN_H))
        pygame.display.set_caption("Sliding Puzzle")
        self._clock = pygame.time.Clock()

        self._f_big = pygame.font.SysFont("Helvetica", 38, bold=True)
        self._f_title = pygame.font.SysFont("Helvetica", 22, bold=True)
        self._f_body = pygame.font.SysFont("Helvetica", 16)
        self._f_btn = pygame.font.SysFont("Helvetica", 17, bold=True)
        self._f_btn_sm = pygame.font.SysFont("Helvetica", 14, bold=True)
        self._f_small = pygame.font.SysFont("Helvetica", 13)

        self._screen = _Screen.MENU
        self._session: GameSession | None = None

        self._build_buttons()

        if board is not None:
            self._session = GameSession.from_board(board)
            self._prepare_tile_images()
            self._screen = _Screen.PLAYING

    @property
    def _pal(self) -> dict[str, tuple[int, int, int]]:
        return _PALETTES[self._settings.dark_mode]

    # ── buttons ─────────────────────────────────────────────────────────────

    def _build_buttons(self) -> None:
        bw, bh, gap = 120, 46, 10
        sizes = range(MIN_SIZE, MAX_SIZE + 1)
        sx = _cx(len(sizes) * bw + (len(sizes) - 1) * gap)
        self._size_btns = {
            s: _Btn((sx + i * (bw + gap), 250, bw, bh), f"{s}×{s}", self._f_btn_sm)
            for i, s in enumerate(sizes)
        }

        bw_lg = 220
        self._play_btn = _Btn((_cx(bw_lg), 330, bw_lg, 50), "P L A Y", self._f_btn, "blue")
        self._theme_btn = _Btn((_cx(bw_lg), 394, bw_lg, 42), "", self._f_btn_sm, "yellow")
        self._hs_btn = _Btn((_cx(bw_lg), 450, bw_lg, 42), "HIGH SCORES", self._f_btn_sm)
        self._quit_btn = _Btn((_cx(bw_lg), 506, bw_lg, 42), "Q U I T", self._f_btn_sm, "red")
        self._menu_all = [
            *self._size_btns.values(),
            self._play_btn,
            self._theme_btn,
            self._hs_btn,
            self._quit_btn,
        ]

        self._new_btn = _Btn((_cx(140), 0, 140, 36), "NEW BOARD (N)", self._f_btn_sm, "pink")
        self._win_again = _Btn((_cx(bw_lg), 420, bw_lg, 50), "PLAY AGAIN", self._f_btn, "green")
        self._win_menu = _Btn((_cx(bw_lg), 488, bw_lg, 46), "M E N U", self._f_btn_sm)
        self._score_back = _Btn((_cx(180), WIN_H - 64, 180, 46), "B A C K", self._f_btn_sm)

    # ── layout ──────────────────────────────────────────────────────────────

    def _tile_layout(self) -> tuple[int, tuple[int, int], int]:
        """Return (tile_px, origin, total_px) for the current board."""
        sz = self._session.size  # type: ignore[union-attr]
        tile_px = (BOARD_MAX - (sz + 1) * TILE_GAP) // sz
        total = sz * tile_px + (sz + 1) * TILE_GAP
        origin = (_cx(total) + TILE_GAP, BOARD_TOP + TILE_GAP)
        return tile_px, origin, total

    def _prepare_tile_images(self) -> None:
        """Slice the configured picture into one surface per tile label."""
        self._tile_images = {}
        if not self._settings.image:
            return
        path = Path(self._settings.image)
        try:
            full_img = pygame.image.load(str(path)).convert()
        except (pygame.error, FileNotFoundError) as e:
            logger.warning("Cannot load puzzle image %s: %s", path, e)
            return

        sz = self._session.size  # type: ignore[union-attr]
        tile_px, _, _ = self._tile_layout()
        full_img = pygame.transform.smoothscale(full_img, (sz * tile_px, sz * tile_px))
        for label in range(1, sz * sz):
            piece = pygame.Rect(crop_box(label, sz, sz * tile_px))
            self._tile_images[label] = full_img.subsurface(piece).copy()

    # ── drawing ─────────────────────────────────────────────────────────────

    def _draw_menu(self) -> None:
        pal = self._pal
        self._surf.fill(pal["base"])
        _blit_center(self._surf, self._f_big.render("SLIDING  PUZZLE", True, pal["text"]), 80)
        _blit_center(
            self._surf, self._f_body.render("Select grid size", True, pal["subtext"]), 210
        )

        for s, btn in self._size_btns.items():
            btn.role = "green" if s == self._settings.grid_size else "surface0"
            btn.draw(self._surf, pal)

        self._theme_btn.text = "LIGHT MODE" if self._settings.dark_mode else "DARK MODE"
        self._play_btn.draw(self._surf, pal)
        self._theme_btn.draw(self._surf, pal)
        self._hs_btn.draw(self._surf, pal)
        self._quit_btn.draw(self._surf, pal)

    def _draw_game(self) -> None:
        pal = self._pal
        self._surf.fill(pal["base"])
        session = self._session
        assert session is not None
        board = session.board
        sz = session.size
        tile_px, origin, total = self._tile_layout()
        f_tile = pygame.font.SysFont("Helvetica", max(14, tile_px // 3), bold=True)

        _blit_center(
            self._surf,
            self._f_title.render(f"Sliding Puzzle  {sz}×{sz}", True, pal["text"]),
            14,
        )
        _blit_center(
            self._surf,
            self._f_body.render(
                f"Moves: {session.moves}    Time: {_fmt(session.elapsed_seconds)}",
                True,
                pal["pink"],
            ),
            44,
        )

        pygame.draw.rect(
            self._surf,
            pal["mantle"],
            pygame.Rect(_cx(total), BOARD_TOP, total, total),
            border_radius=10,
        )

        for i, val in enumerate(board.cells):
            if val is EMPTY:
                continue
            rect = pygame.Rect(tile_rect(i, sz, tile_px, TILE_GAP, origin))
            if val in self._tile_images:
                self._surf.blit(self._tile_images[val], rect.topleft)
            else:
                col = pal["green"] if board.is_tile_correct(i) else pal["blue"]
                pygame.draw.rect(self._surf, col, rect, border_radius=6)
                lbl = f_tile.render(str(val), True, pal["base"])
                self._surf.blit(
                    lbl,
                    (
                        rect.centerx - lbl.get_width() // 2,
                        rect.centery - lbl.get_height() // 2,
                    ),
                )

        self._new_btn.rect.y = BOARD_TOP + total + 10
        self._new_btn.draw(self._surf, pal)
        _blit_center(
            self._surf,
            self._f_small.render(
                "Click a tile or use arrows / WASD     M  menu", True, pal["overlay"]
            ),
            self._new_btn.rect.bottom + 10,
        )

    def _draw_win(self) -> None:
        pal = self._pal
        self._surf.fill(pal["base"])
        session = self._session
        assert session is not None

        _blit_center(
            self._surf,
            self._f_big.render("★  S O L V E D  ★", True, pal["green"]),
            100,
        )
        info = [
            (f"Grid:   {session.size}×{session.size}", pal["subtext"]),
            (f"Moves:  {session.moves}", pal["yellow"]),
            (f"Time:   {_fmt(session.elapsed_seconds)}", pal["yellow"]),
        ]
        y = 200
        for txt, col in info:
            _blit_center(self._surf, self._f_title.render(txt, True, col), y)
            y += 44

        self._win_again.draw(self._surf, pal)
        self._win_menu.draw(self._surf, pal)

    def _draw_scores(self) -> None:
        pal = self._pal
        self._surf.fill(pal["base"])
        _blit_center(self._surf, self._f_big.render("HIGH  SCORES", True, pal["text"]), 24)

        entries = self._hs.get_scores()
        y = 90
        if not entries:
            _blit_center(
                self._surf,
                self._f_body.render("No high scores yet.", True, pal["overlay"]),
                y + 30,
            )
        for i, e in enumerate(entries, 1):
            row = (
                f"{i:>2}.  {e.grid_size}×{e.grid_size}   {e.moves} moves"
                f"   {_fmt(e.time)}   ({e.date[:10]})"
            )
            self._surf.blit(self._f_body.render(row, True, pal["subtext"]), (60, y))
            y += 30

        self._score_back.draw(self._surf, pal)

    # ── event handling ──────────────────────────────────────────────────────

    def _ev_menu(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            for b in self._menu_all:
                b.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            for s, b in self._size_btns.items():
                if b.hit(ev.pos):
                    self._settings.grid_size = s
                    self._store.save(self._settings)
                    return True
            if self._play_btn.hit(ev.pos):
                self._start_game()
            elif self._theme_btn.hit(ev.pos):
                self._settings.dark_mode = not self._settings.dark_mode
                self._store.save(self._settings)
            elif self._hs_btn.hit(ev.pos):
                self._screen = _Screen.SCORES
            elif self._quit_btn.hit(ev.pos):
                return False
        elif ev.type == pygame.KEYDOWN:
            if ev.key == pygame.K_RETURN:
                self._start_game()
            elif ev.key in (pygame.K_q, pygame.K_ESCAPE):
                return False
        return True

    def _ev_game(self, ev: pygame.event.Event) -> bool:
        session = self._session
        assert session is not None
        if ev.type == pygame.MOUSEMOTION:
            self._new_btn.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._new_btn.hit(ev.pos):
                self._start_game()
                return True
            tile_px, origin, _ = self._tile_layout()
            index = index_at(ev.pos, session.size, tile_px, TILE_GAP, origin)
            if index is not None:
                session.click(index)
                self._check_win()
        elif ev.type == pygame.KEYDOWN:
            if ev.key in _KEY_DIRECTIONS:
                session.move(_KEY_DIRECTIONS[ev.key])
                self._check_win()
            elif ev.key == pygame.K_n:
                self._start_game()
            elif ev.key in (pygame.K_m, pygame.K_ESCAPE):
                self._screen = _Screen.MENU
        return True

    def _ev_win(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            self._win_again.motion(ev.pos)
            self._win_menu.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._win_again.hit(ev.pos):
                self._start_game()
            elif self._win_menu.hit(ev.pos):
                self._screen = _Screen.MENU
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_n, pygame.K_RETURN):
                self._start_game()
            elif ev.key in (pygame.K_m, pygame.K_ESCAPE):
                self._screen = _Screen.MENU
        return True

    def _ev_scores(self, ev: pygame.event.Event) -> bool:
        if ev.type == pygame.MOUSEMOTION:
            self._score_back.motion(ev.pos)
        elif ev.type == pygame.MOUSEBUTTONDOWN and ev.button == 1:
            if self._score_back.hit(ev.pos):
                self._screen = _Screen.MENU
        elif ev.type == pygame.KEYDOWN:
            if ev.key in (pygame.K_ESCAPE, pygame.K_BACKSPACE, pygame.K_m):
                self._screen = _Screen.MENU
        return True

    # ── game state ──────────────────────────────────────────────────────────

    def _start_game(self) -> None:
        size = self._settings.grid_size
        if self._session is None or self._session.size != size:
            self._session = GameSession(size)
            self._prepare_tile_images()
        else:
            self._session.new_game()
        self._screen = _Screen.PLAYING

    def _check_win(self) -> None:
        session = self._session
        if session is None or not session.is_won:
            return
        self._hs.add_score(session.score_entry())
        self._screen = _Screen.WIN

    # ── main loop ───────────────────────────────────────────────────────────

    def run_loop(self) -> None:
        _dispatch = {
            _Screen.MENU: self._ev_menu,
            _Screen.PLAYING: self._ev_game,
            _Screen.WIN: self._ev_win,
            _Screen.SCORES: self._ev_scores,
        }
        _draw = {
            _Screen.MENU: self._draw_menu,
            _Screen.PLAYING: self._draw_game,
            _Screen.WIN: self._draw_win,
            _Screen.SCORES: self._draw_scores,
        }

        running = True
        while running:
            for ev in pygame.event.get():
                if ev.type == pygame.QUIT:
                    running = False
                    break
                if not _dispatch[self._screen](ev):
                    running = False
                    break

            _draw[self._screen]()
            pygame.display.flip()
            self._clock.tick(30)

        pygame.quit()


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------
def run(
    settings: Settings, data_dir: Path = Path("data"), board: Board | None = None
) -> None:
    """Launch the Pygame GUI.

    Opens to the menu, or straight into *board* when one is given.
    """
    logger.debug("Starting Pygame frontend with %s", settings)
    app = PygameApp(settings, data_dir, board)
    app.run_loop()
