"""Match-three evidence board played between investigations.

A 12x6 grid of evidence panels. The bottom six rows start filled, the top
six are headroom. The player selects a panel and swaps it with an adjacent
one; a swap only sticks when it lines up three or more panels of the same
type. Clearing four or more (or an L/T shape) leaves a bonus panel behind,
and clearing a bonus panel sets it off.

Every transition takes a ``PanelPuzzleState`` and returns a new one. The
random stream is passed in explicitly so a board is reproducible from its
seed, and panel ids come from a counter stored on the state.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import NamedTuple

from ..generation.random import RandomSource

logger = logging.getLogger(__name__)

GRID_ROWS = 12
GRID_COLS = 6
PLAYABLE_START_ROW = 6
MIN_MATCH = 3
POINTS_PER_PANEL = 10
COMBO_MULTIPLIER = 0.5
DEFAULT_TARGET_SCORE = 250
DEFAULT_TIME_LIMIT = 60
MAX_INITIAL_CLEAR_PASSES = 100


class PanelType(str, Enum):
    MAGNIFIER = "magnifier"
    FINGERPRINT = "fingerprint"
    DOCUMENT = "document"
    WITNESS = "witness"
    KEY = "key"
    FLASHLIGHT = "flashlight"


class BonusType(str, Enum):
    LINE_H = "line_h"
    LINE_V = "line_v"
    CROSS = "cross"
    BLAST = "blast"


class MatchDirection(str, Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    BOTH = "both"


class MatchShape(str, Enum):
    LINE = "line"
    L = "L"
    T = "T"


class PuzzlePhase(str, Enum):
    SELECTING = "selecting"
    SELECTED = "selected"
    CLEARING = "clearing"
    FALLING = "falling"
    WON = "won"
    LOST = "lost"


PANEL_TYPES: tuple[PanelType, ...] = tuple(PanelType)

PANEL_SYMBOLS: dict[PanelType, str] = {
    PanelType.MAGNIFIER: "🔍",
    PanelType.FINGERPRINT: "👆",
    PanelType.DOCUMENT: "📄",
    PanelType.WITNESS: "👁",
    PanelType.KEY: "🗝",
    PanelType.FLASHLIGHT: "🔦",
}

BONUS_SYMBOLS: dict[BonusType, str] = {
    BonusType.LINE_H: "↔",
    BonusType.LINE_V: "↕",
    BonusType.CROSS: "✚",
    BonusType.BLAST: "💥",
}


class Position(NamedTuple):
    row: int
    col: int


class Move(NamedTuple):
    from_: Position
    to: Position


@dataclass(frozen=True)
class Panel:
    type: PanelType
    bonus: BonusType | None
    row: int
    col: int
    id: str


Grid = tuple[tuple["Panel | None", ...], ...]


@dataclass(frozen=True)
class Match:
    positions: tuple[Position, ...]
    direction: MatchDirection
    shape: MatchShape
    type: PanelType


@dataclass(frozen=True)
class PanelPuzzleState:
    grid: Grid
    score: int = 0
    combo: int = 0
    target_score: int = DEFAULT_TARGET_SCORE
    time_remaining: float = DEFAULT_TIME_LIMIT
    is_animating: bool = False
    is_game_over: bool = False
    rise_progress: float = 0.0
    next_row: tuple[Panel, ...] = ()
    selected: Position | None = None
    next_panel_id: int = field(default=0, compare=False)


@dataclass(frozen=True)
class SwapResult:
    swapped: bool
    state: PanelPuzzleState


# -- Panel construction -------------------------------------------------------


class _PanelFactory:
    """Draws panel types from ``random`` and numbers panels from ``next_id``."""

    def __init__(self, random: RandomSource, next_id: int):
        self.random = random
        self.next_id = next_id

    def random_type(self) -> PanelType:
        return self.random.pick(PANEL_TYPES)

    def panel(self, row: int, col: int, bonus: BonusType | None = None) -> Panel:
        return self.typed(self.random_type(), row, col, bonus)

    def typed(
        self, panel_type: PanelType, row: int, col: int, bonus: BonusType | None = None
    ) -> Panel:
        panel = Panel(type=panel_type, bonus=bonus, row=row, col=col, id=f"panel-{self.next_id}")
        self.next_id += 1
        return panel

    def next_row(self) -> tuple[Panel, ...]:
        return tuple(self.panel(GRID_ROWS, col) for col in range(GRID_COLS))


def _thaw(grid: Grid) -> list[list[Panel | None]]:
    return [list(row) for row in grid]


def _freeze(grid: list[list[Panel | None]]) -> Grid:
    return tuple(tuple(row) for row in grid)


def _placed(panel: Panel, row: int, col: int) -> Panel:
    if panel.row == row and panel.col == col:
        return panel
    return replace(panel, row=row, col=col)


def empty_grid() -> Grid:
    return tuple(tuple(None for _ in range(GRID_COLS)) for _ in range(GRID_ROWS))


def create_panel_puzzle(
    random: RandomSource,
    target_score: int = DEFAULT_TARGET_SCORE,
    time_remaining: float = DEFAULT_TIME_LIMIT,
) -> PanelPuzzleState:
    """New board: bottom six rows filled with no ready-made matches."""
    factory = _PanelFactory(random, 0)
    grid = _thaw(empty_grid())
    for row in range(PLAYABLE_START_ROW, GRID_ROWS):
        for col in range(GRID_COLS):
            grid[row][col] = factory.panel(row, col)

    _clear_initial_matches(grid, factory)

    return PanelPuzzleState(
        grid=_freeze(grid),
        target_score=target_score,
        time_remaining=time_remaining,
        next_row=factory.next_row(),
        next_panel_id=factory.next_id,
    )


def _clear_initial_matches(grid: list[list[Panel | None]], factory: _PanelFactory) -> None:
    for _ in range(MAX_INITIAL_CLEAR_PASSES):
        matches = find_matches(_freeze(grid))
        if not matches:
            return
        for match in matches:
            for row, col in match.positions:
                panel = grid[row][col]
                if panel is not None:
                    grid[row][col] = replace(panel, type=factory.random_type())
    logger.debug("Starting board still has matches after %d passes", MAX_INITIAL_CLEAR_PASSES)


# -- Selection and swapping ---------------------------------------------------


def is_adjacent(a: Position, b: Position) -> bool:
    return abs(a.row - b.row) + abs(a.col - b.col) == 1


def _in_bounds(row: int, col: int) -> bool:
    return 0 <= row < GRID_ROWS and 0 <= col < GRID_COLS


def select_panel(state: PanelPuzzleState, row: int, col: int) -> PanelPuzzleState:
    """Select the panel at ``(row, col)``; selecting it again clears the selection."""
    if state.is_animating or state.is_game_over:
        return replace(state, selected=None)
    if not _in_bounds(row, col) or state.grid[row][col] is None:
        return state
    if state.selected == (row, col):
        return replace(state, selected=None)
    return replace(state, selected=Position(row, col))


def _swapped(grid: Grid, a: Position, b: Position) -> Grid:
    cells = _thaw(grid)
    first, second = cells[a.row][a.col], cells[b.row][b.col]
    cells[a.row][a.col] = _placed(second, a.row, a.col) if second else None
    cells[b.row][b.col] = _placed(first, b.row, b.col) if first else None
    return _freeze(cells)


def try_swap(state: PanelPuzzleState, row: int, col: int) -> SwapResult:
    """Swap the selected panel with ``(row, col)`` if the swap makes a match.

    A swap that matches nothing is undone and the selection cleared.
    """
    if state.is_animating or state.is_game_over:
        return SwapResult(swapped=False, state=state)
    selected = state.selected
    target = Position(row, col)
    if selected is None or not _in_bounds(row, col) or not is_adjacent(selected, target):
        return SwapResult(swapped=False, state=state)

    grid = _swapped(state.grid, selected, target)
    if not find_matches(grid):
        return SwapResult(swapped=False, state=replace(state, selected=None))

    return SwapResult(
        swapped=True,
        state=replace(state, grid=grid, selected=None, is_animating=True),
    )


def swap_panels(state: PanelPuzzleState, row: int, col: int) -> PanelPuzzleState:
    """Unconditionally swap ``(row, col)`` with its right neighbour."""
    if state.is_animating or state.is_game_over:
        return state
    if not _in_bounds(row, col) or col >= GRID_COLS - 1:
        return state
    return replace(state, grid=_swapped(state.grid, Position(row, col), Position(row, col + 1)))


# -- Matching -----------------------------------------------------------------


@dataclass(frozen=True)
class _Run:
    positions: tuple[Position, ...]
    type: PanelType


def _scan(cells: list[tuple[Position, Panel | None]]) -> list[_Run]:
    runs: list[_Run] = []
    current: list[Position] = []
    current_type: PanelType | None = None
    for pos, panel in cells:
        if panel is not None and (not current or panel.type == current_type):
            if not current:
                current_type = panel.type
            current.append(pos)
            continue
        if len(current) >= MIN_MATCH:
            runs.append(_Run(tuple(current), current_type))  # type: ignore[arg-type]
        current = [pos] if panel is not None else []
        current_type = panel.type if panel is not None else None
    if len(current) >= MIN_MATCH:
        runs.append(_Run(tuple(current), current_type))  # type: ignore[arg-type]
    return runs


def find_matches(grid: Grid) -> list[Match]:
    """All runs of three or more, with crossing runs merged into L/T shapes.

    Merged shapes come first, then the remaining horizontal runs, then the
    remaining vertical runs.
    """
    horizontal: list[_Run] = []
    for row in range(GRID_ROWS):
        horizontal.extend(_scan([(Position(row, col), grid[row][col]) for col in range(GRID_COLS)]))
    vertical: list[_Run] = []
    for col in range(GRID_COLS):
        vertical.extend(_scan([(Position(row, col), grid[row][col]) for row in range(GRID_ROWS)]))

    # position -> [horizontal run index, vertical run index]
    owners: dict[Position, list[int | None]] = {}
    for i, run in enumerate(horizontal):
        for pos in run.positions:
            owners.setdefault(pos, [None, None])[0] = i
    for i, run in enumerate(vertical):
        for pos in run.positions:
            owners.setdefault(pos, [None, None])[1] = i

    matches: list[Match] = []
    used_h: set[int] = set()
    used_v: set[int] = set()
    for pos, (h, v) in owners.items():
        if h is None or v is None or h in used_h or v in used_v:
            continue
        used_h.add(h)
        used_v.add(v)
        h_run, v_run = horizontal[h], vertical[v]
        merged = list(h_run.positions)
        merged.extend(p for p in v_run.positions if p not in h_run.positions)
        interior_h = h_run.positions[0].col < pos.col < h_run.positions[-1].col
        interior_v = v_run.positions[0].row < pos.row < v_run.positions[-1].row
        matches.append(
            Match(
                positions=tuple(merged),
                direction=MatchDirection.BOTH,
                shape=MatchShape.T if interior_h or interior_v else MatchShape.L,
                type=h_run.type,
            )
        )

    for i, run in enumerate(horizontal):
        if i not in used_h:
            matches.append(Match(run.positions, MatchDirection.HORIZONTAL, MatchShape.LINE, run.type))
    for i, run in enumerate(vertical):
        if i not in used_v:
            matches.append(Match(run.positions, MatchDirection.VERTICAL, MatchShape.LINE, run.type))
    return matches


def bonus_for_match(match: Match) -> BonusType | None:
    """Bonus left behind by ``match``, if it is big enough to earn one."""
    if match.shape in (MatchShape.L, MatchShape.T):
        return BonusType.BLAST
    size = len(match.positions)
    if size >= 5:
        return BonusType.CROSS
    if size == 4:
        return BonusType.LINE_H if match.direction == MatchDirection.HORIZONTAL else BonusType.LINE_V
    return None


def _bonus_area(grid: list[list[Panel | None]], pos: Position, bonus: BonusType) -> list[Position]:
    """Occupied cells a bonus at ``pos`` clears."""
    if bonus == BonusType.LINE_H:
        cells = [Position(pos.row, c) for c in range(GRID_COLS)]
    elif bonus == BonusType.LINE_V:
        cells = [Position(r, pos.col) for r in range(GRID_ROWS)]
    elif bonus == BonusType.CROSS:
        cells = [Position(pos.row, c) for c in range(GRID_COLS)]
        cells.extend(Position(r, pos.col) for r in range(GRID_ROWS) if r != pos.row)
    else:
        cells = [
            Position(pos.row + dr, pos.col + dc)
            for dr in (-1, 0, 1)
            for dc in (-1, 0, 1)
            if _in_bounds(pos.row + dr, pos.col + dc)
        ]
    return [p for p in cells if grid[p.row][p.col] is not None]


def process_matches(state: PanelPuzzleState) -> PanelPuzzleState:
    """Clear every current match once, set off bonuses and score the wave.

    With nothing to clear the board settles: animation stops and the combo
    resets.
    """
    matches = find_matches(state.grid)
    if not matches:
        return replace(state, is_animating=False, combo=0)

    grid = _thaw(state.grid)
    triggered: deque[tuple[Position, BonusType]] = deque()
    created: list[tuple[Position, PanelType, BonusType]] = []

    for match in matches:
        bonus = bonus_for_match(match)
        if bonus is not None:
            created.append((match.positions[len(match.positions) // 2], match.type, bonus))
        for row, col in match.positions:
            panel = grid[row][col]
            if panel is not None and panel.bonus is not None:
                triggered.append((Position(row, col), panel.bonus))
        for row, col in match.positions:
            grid[row][col] = None

    activated: set[Position] = set()
    while triggered:
        pos, bonus = triggered.popleft()
        if pos in activated:
            continue
        activated.add(pos)
        for cleared in _bonus_area(grid, pos, bonus):
            panel = grid[cleared.row][cleared.col]
            if panel is not None and panel.bonus is not None and cleared not in activated:
                triggered.append((cleared, panel.bonus))
            grid[cleared.row][cleared.col] = None
    if activated:
        logger.debug("Set off %d bonus panel(s)", len(activated))

    next_id = state.next_panel_id
    for pos, panel_type, bonus in created:
        if grid[pos.row][pos.col] is None:
            grid[pos.row][pos.col] = Panel(panel_type, bonus, pos.row, pos.col, f"panel-{next_id}")
            next_id += 1

    base = sum(len(m.positions) * POINTS_PER_PANEL for m in matches)
    gained = math.floor(base * (1 + state.combo * COMBO_MULTIPLIER))
    return replace(
        state,
        grid=_freeze(grid),
        score=state.score + gained,
        combo=state.combo + 1,
        is_animating=True,
        next_panel_id=next_id,
    )


# -- Gravity and rising -------------------------------------------------------


def apply_gravity(state: PanelPuzzleState, random: RandomSource) -> PanelPuzzleState:
    """Drop panels to the bottom of each column and refill the playable band.

    Columns are compacted in order. Holes left above row six stay empty.
    """
    factory = _PanelFactory(random, state.next_panel_id)
    grid = _thaw(state.grid)
    for col in range(GRID_COLS):
        write_row = GRID_ROWS - 1
        for row in range(GRID_ROWS - 1, -1, -1):
            panel = grid[row][col]
            if panel is None:
                continue
            grid[row][col] = None
            grid[write_row][col] = _placed(panel, write_row, col)
            write_row -= 1
        for row in range(write_row, PLAYABLE_START_ROW - 1, -1):
            grid[row][col] = factory.panel(row, col)
    return replace(state, grid=_freeze(grid), next_panel_id=factory.next_id)


def raise_rows(state: PanelPuzzleState, random: RandomSource) -> PanelPuzzleState:
    """Push the board up one row and bring in ``next_row`` at the bottom.

    Anything already in the top row means the stack has topped out.
    """
    if any(panel is not None for panel in state.grid[0]):
        return replace(state, is_game_over=True)

    rows = [
        tuple(_placed(p, r, c) if p else None for c, p in enumerate(state.grid[r + 1]))
        for r in range(GRID_ROWS - 1)
    ]
    rows.append(tuple(_placed(p, GRID_ROWS - 1, c) for c, p in enumerate(state.next_row)))

    factory = _PanelFactory(random, state.next_panel_id)
    return replace(
        state,
        grid=tuple(rows),
        next_row=factory.next_row(),
        rise_progress=0.0,
        next_panel_id=factory.next_id,
    )


def tick(state: PanelPuzzleState, delta: float) -> PanelPuzzleState:
    """Advance the clock by ``delta`` seconds."""
    if state.is_game_over:
        return state
    remaining = max(0.0, state.time_remaining - delta)
    return replace(state, time_remaining=remaining, is_game_over=remaining <= 0)


# -- Outcome ------------------------------------------------------------------


def find_valid_move(state: PanelPuzzleState) -> Move | None:
    """First swap, scanning rows top-down, that would produce a match."""
    grid = state.grid
    for row in range(GRID_ROWS):
        for col in range(GRID_COLS):
            if grid[row][col] is None:
                continue
            origin = Position(row, col)
            for target in (Position(row, col + 1), Position(row + 1, col)):
                if not _in_bounds(*target) or grid[target.row][target.col] is None:
                    continue
                if find_matches(_swapped(grid, origin, target)):
                    return Move(origin, target)
    return None


def has_valid_moves(state: PanelPuzzleState) -> bool:
    return find_valid_move(state) is not None


def is_game_won(state: PanelPuzzleState) -> bool:
    return state.score >= state.target_score


def is_game_over(state: PanelPuzzleState) -> bool:
    """Round ended by the clock, a top-out or ``check_board``; see ``is_game_won``."""
    return state.is_game_over or state.time_remaining <= 0


def is_game_lost(state: PanelPuzzleState) -> bool:
    if is_game_won(state):
        return False
    return state.is_game_over or state.time_remaining <= 0 or not has_valid_moves(state)


def reset_combo_if_no_match(state: PanelPuzzleState) -> PanelPuzzleState:
    if find_matches(state.grid):
        return state
    return replace(state, combo=0)


def settle(state: PanelPuzzleState) -> PanelPuzzleState:
    """Stop animating and drop the combo once the board holds no match."""
    if find_matches(state.grid):
        return state
    return replace(state, is_animating=False, combo=0)


def check_board(state: PanelPuzzleState) -> PanelPuzzleState:
    """End the round once the target is reached or no swap can match."""
    if state.is_game_over:
        return state
    if is_game_won(state) or not has_valid_moves(state):
        return replace(state, is_game_over=True)
    return state


def resolve_cascade(state: PanelPuzzleState, random: RandomSource) -> PanelPuzzleState:
    """Clear, drop and refill until the board settles, then check the outcome."""
    waves = 0
    while True:
        state = process_matches(state)
        if not state.is_animating:
            break
        waves += 1
        state = apply_gravity(state, random)
    if waves:
        logger.debug("Cascade settled after %d wave(s), score=%d", waves, state.score)
    return check_board(state)


def puzzle_phase(state: PanelPuzzleState) -> PuzzlePhase:
    if is_game_won(state):
        return PuzzlePhase.WON
    if state.is_game_over or state.time_remaining <= 0:
        return PuzzlePhase.LOST
    if state.is_animating:
        has_holes = any(
            state.grid[row][col] is None
            for row in range(PLAYABLE_START_ROW, GRID_ROWS)
            for col in range(GRID_COLS)
        )
        return PuzzlePhase.FALLING if has_holes else PuzzlePhase.CLEARING
    if state.selected is not None:
        return PuzzlePhase.SELECTED
    return PuzzlePhase.SELECTING


def tokens_earned(state: PanelPuzzleState) -> int:
    """Search tokens awarded for a finished round."""
    if is_game_won(state):
        return 3
    if state.score >= state.target_score / 2:
        return 2
    return 1


def panel_symbol(panel: Panel | None) -> str:
    if panel is None:
        return "·"
    if panel.bonus is not None:
        return BONUS_SYMBOLS[panel.bonus]
    return PANEL_SYMBOLS[panel.type]
