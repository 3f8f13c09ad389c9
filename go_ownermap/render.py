"""
Text rendering of ownership statistics for debugging.
"""

import sys
from typing import Optional, TextIO

from .board import GTP_COLUMNS, BoardState, Point
from .config import AppConfig, load_config
from .ownermap import OwnerMap, PointJudgement
from .score import score_estimate_label

# Symbols at the strict threshold, and the lowercase fallback used when the
# strict verdict is unclear
STRICT_SYMBOLS = {
    PointJudgement.DAME: ":",
    PointJudgement.BLACK: "X",
    PointJudgement.WHITE: "O",
    PointJudgement.UNKNOWN: ",",
}
LOOSE_SYMBOLS = {
    PointJudgement.DAME: ":",
    PointJudgement.BLACK: "x",
    PointJudgement.WHITE: "o",
    PointJudgement.UNKNOWN: ",",
}


def point_symbol(ownermap: OwnerMap, point: Point, config: AppConfig) -> str:
    """Single-character verdict for a point."""
    judgement = ownermap.judge_point(point, config.judgement.group_threshold)
    if judgement == PointJudgement.UNKNOWN:
        return LOOSE_SYMBOLS[ownermap.judge_point(point, config.judgement.loose_threshold)]
    return STRICT_SYMBOLS[judgement]


def render_ownermap(
    board: BoardState,
    ownermap: Optional[OwnerMap] = None,
    config: Optional[AppConfig] = None,
) -> str:
    """
    Render per-point verdicts as a board diagram.

    Args:
        board: Position the statistics were gathered for
        ownermap: Accumulated statistics; without it every point shows "."
        config: Thresholds (defaults to load_config())

    Returns:
        Multi-line string, top row first
    """
    if config is None:
        config = load_config()

    has_data = ownermap is not None and ownermap.playouts > 0
    lines = []
    if has_data:
        label = score_estimate_label(board, ownermap, config.judgement.score_threshold)
        lines.append(f"Score Est: {label}")

    columns = GTP_COLUMNS[:board.size]
    lines.append("     " + " ".join(columns))
    for y in reversed(range(board.size)):
        cells = []
        for x in range(board.size):
            if has_data:
                cells.append(point_symbol(ownermap, (x, y), config))
            else:
                cells.append(".")
        lines.append(f"{y + 1:2d} | " + " ".join(cells))

    return "\n".join(lines)


def print_ownermap(
    board: BoardState,
    ownermap: Optional[OwnerMap] = None,
    config: Optional[AppConfig] = None,
    file: Optional[TextIO] = None,
) -> None:
    """Write render_ownermap() output to `file` (stderr by default)."""
    if file is None:
        file = sys.stderr
    print(render_ownermap(board, ownermap, config), file=file)
