"""
Ownership statistics accumulated over Monte-Carlo playouts.

Each playout's final position is folded into per-point counters of who ended
up owning the point. Worker threads each fill a private OwnerMap; the maps are
merged once all workers are done and only then queried for verdicts.
"""

import logging
from enum import Enum
from typing import Iterable, Optional, Tuple

import numpy as np

from .board import BLACK, WHITE, BoardState, Point
from .config import GJ_THRESHOLD, LOOSE_THRESHOLD

logger = logging.getLogger(__name__)

__all__ = [
    "GJ_THRESHOLD",
    "LOOSE_THRESHOLD",
    "OwnerMap",
    "OwnerMapError",
    "EmptyOwnerMapError",
    "BoardSizeMismatchError",
    "UnresolvedGroupError",
    "PointJudgement",
    "merge_ownermaps",
]


# ============================================================================
# Exceptions
# ============================================================================

class OwnerMapError(Exception):
    """Base exception for ownership statistics misuse."""
    pass


class EmptyOwnerMapError(OwnerMapError):
    """Raised when a map is queried before any playout was accumulated."""
    pass


class BoardSizeMismatchError(OwnerMapError):
    """Raised when maps or boards of different sizes are combined."""
    pass


class UnresolvedGroupError(OwnerMapError):
    """Raised when group status is queried for a group the judgement never saw."""
    pass


# ============================================================================
# Outcomes and Verdicts
# ============================================================================

# Counter columns: who owned the point at the end of a playout
OUTCOME_NONE = 0
OUTCOME_BLACK = 1
OUTCOME_WHITE = 2
NUM_OUTCOMES = 3

_OUTCOME_OF_COLOR = {
    None: OUTCOME_NONE,
    BLACK: OUTCOME_BLACK,
    WHITE: OUTCOME_WHITE,
}


class PointJudgement(Enum):
    """Verdict on a single point."""
    DAME = "dame"
    BLACK = "black"
    WHITE = "white"
    UNKNOWN = "unknown"


_COLOR_OF_JUDGEMENT = {
    PointJudgement.DAME: None,
    PointJudgement.BLACK: BLACK,
    PointJudgement.WHITE: WHITE,
    PointJudgement.UNKNOWN: None,
}

_JUDGEMENT_OF_COLOR = {
    BLACK: PointJudgement.BLACK,
    WHITE: PointJudgement.WHITE,
}


def judgement_for_color(color: str) -> PointJudgement:
    """Verdict that says a point belongs to `color`."""
    return _JUDGEMENT_OF_COLOR[color]


# ============================================================================
# Ownership Map
# ============================================================================

class OwnerMap:
    """
    Per-point ownership counters over a number of playouts.

    counts[i] holds (unclaimed, black, white) tallies for the point with flat
    index i (y * size + x); every row sums to `playouts`.

    Usage:
        ownermap = OwnerMap.for_board(board)
        for final_board in playouts:
            ownermap.fill(final_board)

        ownermap.judge_point((3, 3), GJ_THRESHOLD)
    """

    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}")
        self.size = size
        self.playouts = 0
        self.counts = np.zeros((size * size, NUM_OUTCOMES), dtype=np.int64)

    @classmethod
    def for_board(cls, board: BoardState) -> 'OwnerMap':
        """Create an empty map sized for a board."""
        return cls(board.size)

    @property
    def num_points(self) -> int:
        return self.size * self.size

    def copy(self) -> 'OwnerMap':
        """Create an independent copy of this map."""
        other = OwnerMap(self.size)
        other.playouts = self.playouts
        other.counts = self.counts.copy()
        return other

    def _index(self, point: Point) -> int:
        x, y = point
        if not (0 <= x < self.size and 0 <= y < self.size):
            raise ValueError(f"Point {point} is off the {self.size}x{self.size} board")
        return y * self.size + x

    def check_board(self, board: BoardState) -> None:
        """Raise BoardSizeMismatchError unless the board matches this map."""
        if board.size != self.size:
            raise BoardSizeMismatchError(
                f"{self.size}x{self.size} map used with a {board.size}x{board.size} board"
            )

    # ------------------------------------------------------------------
    # Accumulation
    # ------------------------------------------------------------------

    def fill(self, board: BoardState) -> None:
        """
        Record the final position of one playout.

        An occupied point counts for its stone's color; an empty point counts
        for the color whose one-point eye it is, or as unclaimed.

        Outcomes are collected for the whole board before anything is added,
        so a failing board leaves the map untouched.

        Raises:
            BoardSizeMismatchError: If the board size differs from the map
            ValueError: If a stone has an unknown color
        """
        self.check_board(board)

        outcomes = np.empty(self.num_points, dtype=np.intp)
        for point in board.points():
            color = board.at(point)
            if color is None:
                color = board.one_point_eye(point)
            if color not in _OUTCOME_OF_COLOR:
                raise ValueError(f"Unknown stone color {color!r} at {point}")
            outcomes[board.point_index(point)] = _OUTCOME_OF_COLOR[color]

        self.counts[np.arange(self.num_points), outcomes] += 1
        self.playouts += 1

    def merge(self, other: 'OwnerMap') -> None:
        """
        Add another map's playouts into this one.

        Merging is commutative and associative, so worker maps can be folded
        in any order.

        Raises:
            BoardSizeMismatchError: If the maps cover different point counts
        """
        if other.num_points != self.num_points:
            raise BoardSizeMismatchError(
                f"Cannot merge a map of {other.num_points} points into one of {self.num_points}"
            )

        self.playouts += other.playouts
        self.counts += other.counts
        logger.debug("Merged %d playouts, total %d", other.playouts, self.playouts)

    def point_counts(self, point: Point) -> Tuple[int, int, int]:
        """Return (unclaimed, black, white) tallies for a point."""
        n, b, w = self.counts[self._index(point)]
        return int(n), int(b), int(w)

    # ------------------------------------------------------------------
    # Point judgement
    # ------------------------------------------------------------------

    def _require_playouts(self) -> None:
        if self.playouts == 0:
            raise EmptyOwnerMapError("Ownership map has no playouts")

    def estimate_point(self, point: Point) -> float:
        """
        Signed ownership lean of a point in [-1, 1].

        +1 means Black owned it in every playout, -1 means White did.
        """
        self._require_playouts()
        _, b, w = self.point_counts(point)
        return (b - w) / self.playouts

    def judge_point(self, point: Point, threshold: float) -> PointJudgement:
        """
        Classify a point by thresholded majority vote.

        Unclaimed outcomes count towards both colors. The checks run in a
        fixed order (dame, black, white) and the first one reaching
        `threshold * playouts` wins.

        Args:
            point: (x, y) point
            threshold: Fraction of playouts required, in [0, 1]

        Returns:
            PointJudgement verdict
        """
        self._require_playouts()
        n, b, w = self.point_counts(point)
        needed = self.playouts * threshold

        if n >= needed:
            return PointJudgement.DAME
        elif n + b >= needed:
            return PointJudgement.BLACK
        elif n + w >= needed:
            return PointJudgement.WHITE
        else:
            return PointJudgement.UNKNOWN

    def color(self, point: Point, threshold: float) -> Optional[str]:
        """Stone color owning a point at `threshold`, or None (dame/unclear)."""
        return _COLOR_OF_JUDGEMENT[self.judge_point(point, threshold)]

    def __repr__(self) -> str:
        return f"OwnerMap(size={self.size}, playouts={self.playouts})"


def merge_ownermaps(maps: Iterable[OwnerMap]) -> OwnerMap:
    """
    Fold worker maps into a fresh map.

    Call once every worker has finished filling its own map.

    Raises:
        ValueError: If no maps are given
        BoardSizeMismatchError: If the maps cover different boards
    """
    maps = list(maps)
    if not maps:
        raise ValueError("No ownership maps to merge")

    merged = OwnerMap(maps[0].size)
    for ownermap in maps:
        merged.merge(ownermap)
    return merged
