"""
Board state for the ownership statistics core.

Provides:
- BoardState: Stones, komi, handicap and scoring rules of a position
- Chain (group) identification and one-point eye detection
- Standard handicap stone placements for 9x9, 13x13, 19x19

Capture and legality rules are not implemented here: playout engines hand
in finished snapshots, and stones are placed exactly as given.
"""

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterator, List, Optional, Tuple

# GTP column letters (I is skipped in Go)
GTP_COLUMNS = "ABCDEFGHJKLMNOPQRST"

BLACK = 'B'
WHITE = 'W'
COLORS = (BLACK, WHITE)

# Scoring rules and whether handicap stones are compensated
RULES_HANDICAP_COMPENSATION = {
    "chinese": True,
    "japanese": False,
}

Point = Tuple[int, int]


def other_color(color: str) -> str:
    """Return the opposing color."""
    if color == BLACK:
        return WHITE
    if color == WHITE:
        return BLACK
    raise ValueError(f"Color must be 'B' or 'W', got {color}")


# ============================================================================
# Standard Handicap Positions
# ============================================================================

HANDICAP_19x19 = {
    2: ["D4", "Q16"],
    3: ["D4", "Q16", "D16"],
    4: ["D4", "Q16", "D16", "Q4"],
    5: ["D4", "Q16", "D16", "Q4", "K10"],
    6: ["D4", "Q16", "D16", "Q4", "D10", "Q10"],
    7: ["D4", "Q16", "D16", "Q4", "D10", "Q10", "K10"],
    8: ["D4", "Q16", "D16", "Q4", "D10", "Q10", "K4", "K16"],
    9: ["D4", "Q16", "D16", "Q4", "D10", "Q10", "K4", "K16", "K10"],
}

HANDICAP_13x13 = {
    2: ["D4", "K10"],
    3: ["D4", "K10", "D10"],
    4: ["D4", "K10", "D10", "K4"],
    5: ["D4", "K10", "D10", "K4", "G7"],
    6: ["D4", "K10", "D10", "K4", "D7", "K7"],
    7: ["D4", "K10", "D10", "K4", "D7", "K7", "G7"],
    8: ["D4", "K10", "D10", "K4", "D7", "K7", "G4", "G10"],
    9: ["D4", "K10", "D10", "K4", "D7", "K7", "G4", "G10", "G7"],
}

HANDICAP_9x9 = {
    2: ["C3", "G7"],
    3: ["C3", "G7", "C7"],
    4: ["C3", "G7", "C7", "G3"],
    5: ["C3", "G7", "C7", "G3", "E5"],
    6: ["C3", "G7", "C7", "G3", "C5", "G5"],
    7: ["C3", "G7", "C7", "G3", "C5", "G5", "E5"],
    8: ["C3", "G7", "C7", "G3", "C5", "G5", "E3", "E7"],
    9: ["C3", "G7", "C7", "G3", "C5", "G5", "E3", "E7", "E5"],
}


def get_handicap_positions(board_size: int, handicap: int) -> List[str]:
    """
    Get standard handicap stone positions for a given board size.

    Args:
        board_size: Size of the board (9, 13, or 19)
        handicap: Number of handicap stones (2-9)

    Returns:
        List of GTP coordinates for handicap stones (e.g., ["D4", "Q16"])

    Raises:
        ValueError: If board_size or handicap is invalid
    """
    if handicap < 2:
        return []

    if handicap > 9:
        raise ValueError(f"Handicap must be 2-9, got {handicap}")

    if board_size == 19:
        positions = HANDICAP_19x19.get(handicap)
    elif board_size == 13:
        positions = HANDICAP_13x13.get(handicap)
    elif board_size == 9:
        positions = HANDICAP_9x9.get(handicap)
    else:
        raise ValueError(f"Handicap needs a 9, 13, or 19 board, got {board_size}")

    return positions


# ============================================================================
# Coordinate Conversion
# ============================================================================

def gtp_to_coords(gtp_coord: str, board_size: int = 19) -> Point:
    """
    Convert GTP coordinate (e.g., "Q16") to (x, y) tuple.

    x runs left to right, y bottom to top, both 0-based.

    Raises:
        ValueError: If coordinate is invalid
    """
    if not gtp_coord or len(gtp_coord) < 2:
        raise ValueError(f"Invalid GTP coordinate: {gtp_coord}")

    col = gtp_coord[0].upper()
    try:
        row = int(gtp_coord[1:])
    except ValueError:
        raise ValueError(f"Invalid GTP coordinate: {gtp_coord}")

    if col not in GTP_COLUMNS:
        raise ValueError(f"Invalid column letter: {col}")

    x = GTP_COLUMNS.index(col)
    y = row - 1

    if not (0 <= x < board_size and 0 <= y < board_size):
        raise ValueError(f"Coordinate {gtp_coord} out of bounds for {board_size}x{board_size}")

    return (x, y)


def coords_to_gtp(x: int, y: int) -> str:
    """Convert (x, y) coordinates to GTP string, e.g. (3, 3) -> "D4"."""
    return f"{GTP_COLUMNS[x]}{y + 1}"


# ============================================================================
# Board State
# ============================================================================

@dataclass
class BoardState:
    """
    A Go position as seen by the ownership statistics.

    Attributes:
        size: Board size (1-19)
        stones: Dictionary of placed stones {(x, y): 'B' or 'W'}
        moves: List of moves in order [(color, coord), ...]
        handicap_stones: List of handicap stone coordinates
        komi: Komi value
        next_player: Next player to move ('B' or 'W')
        rules: Scoring rules, "chinese" or "japanese"
    """
    size: int = 19
    stones: Dict[Point, str] = field(default_factory=dict)
    moves: List[Tuple[str, str]] = field(default_factory=list)
    handicap_stones: List[str] = field(default_factory=list)
    komi: float = 7.5
    next_player: str = BLACK
    rules: str = "chinese"
    _groups: Optional[Dict[Point, Point]] = field(
        default=None, init=False, repr=False, compare=False
    )
    _groups_key: Optional[FrozenSet[Tuple[Point, str]]] = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        """Validate board state after initialization."""
        if not (1 <= self.size <= len(GTP_COLUMNS)):
            raise ValueError(f"Board size must be 1-{len(GTP_COLUMNS)}, got {self.size}")
        if self.rules not in RULES_HANDICAP_COMPENSATION:
            raise ValueError(f"Unknown rules: {self.rules}")

        stones = {}
        for point, color in self.stones.items():
            color = color.upper() if isinstance(color, str) else color
            if color not in COLORS:
                raise ValueError(f"Color must be 'B' or 'W', got {color!r} at {point}")
            if not self.is_on_board(point):
                raise ValueError(f"Point {point} is off the {self.size}x{self.size} board")
            stones[point] = color
        self.stones = stones

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    @property
    def num_points(self) -> int:
        return self.size * self.size

    def points(self) -> Iterator[Point]:
        """Iterate over all points in scan order (bottom row first)."""
        for y in range(self.size):
            for x in range(self.size):
                yield (x, y)

    def is_on_board(self, point: Point) -> bool:
        x, y = point
        return 0 <= x < self.size and 0 <= y < self.size

    def point_index(self, point: Point) -> int:
        """Flat index of a point, y * size + x."""
        if not self.is_on_board(point):
            raise ValueError(f"Point {point} is off the {self.size}x{self.size} board")
        x, y = point
        return y * self.size + x

    def neighbors(self, point: Point) -> List[Point]:
        """Orthogonal neighbours that lie on the board."""
        x, y = point
        candidates = [(x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)]
        return [p for p in candidates if self.is_on_board(p)]

    def at(self, point: Point) -> Optional[str]:
        """Stone color at a point, or None if empty."""
        return self.stones.get(point)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def place(self, color: str, point: Point) -> None:
        """
        Put a stone on an empty point without recording a move.

        Raises:
            ValueError: If the color is invalid, the point is off the board
                        or already occupied
        """
        color = color.upper()
        if color not in COLORS:
            raise ValueError(f"Color must be 'B' or 'W', got {color}")
        if not self.is_on_board(point):
            raise ValueError(f"Point {point} is off the {self.size}x{self.size} board")
        if point in self.stones:
            raise ValueError(f"Position {coords_to_gtp(*point)} is already occupied")

        self.stones[point] = color

    def remove(self, point: Point) -> None:
        """Lift the stone at a point (no-op if empty)."""
        self.stones.pop(point, None)

    def setup_handicap(self, handicap: int) -> None:
        """
        Place standard handicap stones on the board.

        Args:
            handicap: Number of handicap stones (2-9)
        """
        if handicap < 2:
            return

        positions = get_handicap_positions(self.size, handicap)
        self.handicap_stones = positions.copy()

        for coord in positions:
            self.place(BLACK, gtp_to_coords(coord, self.size))

        # After handicap, White plays first
        self.next_player = WHITE

    def play(self, color: str, coord: str) -> None:
        """
        Play a move on the board.

        Args:
            color: 'B' or 'W'
            coord: GTP coordinate (e.g., "Q16"), or "PASS"

        Raises:
            ValueError: If move is invalid
        """
        color = color.upper()
        if color not in COLORS:
            raise ValueError(f"Color must be 'B' or 'W', got {color}")

        if coord.upper() != "PASS":
            self.place(color, gtp_to_coords(coord, self.size))
        self.moves.append((color, coord.upper()))

        self.next_player = other_color(color)

    def play_moves(self, moves: List[str]) -> None:
        """
        Play a sequence of moves.

        Args:
            moves: List of moves in GTP format, e.g., ["B Q16", "W D4", "B Q3"]
        """
        for move in moves:
            parts = move.strip().split()
            if len(parts) != 2:
                raise ValueError(f"Invalid move format: {move}. Expected 'COLOR COORD'")
            color, coord = parts
            self.play(color, coord)

    # ------------------------------------------------------------------
    # Groups and eyes
    # ------------------------------------------------------------------

    def _build_groups(self) -> Dict[Point, Point]:
        """Flood fill every chain; the id is its first stone in scan order."""
        groups: Dict[Point, Point] = {}
        for point in self.points():
            color = self.stones.get(point)
            if color is None or point in groups:
                continue
            stack = [point]
            groups[point] = point
            while stack:
                current = stack.pop()
                for n in self.neighbors(current):
                    if n not in groups and self.stones.get(n) == color:
                        groups[n] = point
                        stack.append(n)
        return groups

    def group_map(self) -> Dict[Point, Point]:
        """
        Group id of every stone on the board.

        Rebuilt whenever the stones differ from the last build, including
        direct writes to `stones`.
        """
        key = frozenset(self.stones.items())
        if self._groups is None or key != self._groups_key:
            self._groups = self._build_groups()
            self._groups_key = key
        return self._groups

    def group_at(self, point: Point) -> Optional[Point]:
        """Canonical id of the chain at a point, or None for an empty point."""
        return self.group_map().get(point)

    def group_stones(self, group: Point) -> List[Point]:
        """Stones belonging to a group, in scan order."""
        groups = self.group_map()
        return [p for p in self.points() if groups.get(p) == group]

    def one_point_eye(self, point: Point) -> Optional[str]:
        """
        Color owning a one-point eye at this point, if any.

        An empty point is a one-point eye of a color when all of its on-board
        neighbours are stones of that color.
        """
        if point in self.stones:
            return None
        colors = {self.stones.get(n) for n in self.neighbors(point)}
        if len(colors) == 1:
            color = colors.pop()
            if color is not None:
                return color
        return None

    # ------------------------------------------------------------------
    # Scoring
    # ------------------------------------------------------------------

    def handicap_compensation(self) -> int:
        """Points given to White for handicap stones under the current rules."""
        if not RULES_HANDICAP_COMPENSATION[self.rules]:
            return 0
        return len(self.handicap_stones)

    def copy(self) -> 'BoardState':
        """Create a deep copy of this board state."""
        return BoardState(
            size=self.size,
            stones=self.stones.copy(),
            moves=self.moves.copy(),
            handicap_stones=self.handicap_stones.copy(),
            komi=self.komi,
            next_player=self.next_player,
            rules=self.rules,
        )

    def __repr__(self) -> str:
        return (
            f"BoardState(size={self.size}, "
            f"stones={len(self.stones)}, "
            f"moves={len(self.moves)}, "
            f"handicap={len(self.handicap_stones)}, "
            f"komi={self.komi}, "
            f"rules={self.rules})"
        )


def create_board(
    size: int = 19,
    handicap: int = 0,
    komi: Optional[float] = None,
    moves: Optional[List[str]] = None,
    rules: str = "chinese",
) -> BoardState:
    """
    Factory function to create a BoardState with optional setup.

    Args:
        size: Board size (1-19; handicap needs 9, 13, or 19)
        handicap: Number of handicap stones (0-9)
        komi: Komi value (default: 7.5, or 0.5 for handicap games)
        moves: List of moves in GTP format, e.g., ["B Q16", "W D4"]
        rules: Scoring rules, "chinese" or "japanese"

    Returns:
        Configured BoardState instance
    """
    if komi is None:
        komi = 0.5 if handicap >= 2 else 7.5

    board = BoardState(size=size, komi=komi, rules=rules)

    if handicap >= 2:
        board.setup_handicap(handicap)

    if moves:
        board.play_moves(moves)

    return board
