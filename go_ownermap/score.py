"""
Score estimation from ownership statistics.

Positive scores favor White, negative scores favor Black.
"""

import logging
from collections import Counter

from .board import BLACK, WHITE, BoardState, Point
from .config import LOOSE_THRESHOLD
from .ownermap import OwnerMap, PointJudgement, judgement_for_color

logger = logging.getLogger(__name__)


def score_estimate_point(
    board: BoardState,
    ownermap: OwnerMap,
    point: Point,
    threshold: float = LOOSE_THRESHOLD,
) -> PointJudgement:
    """
    Verdict used for scoring a single point.

    If the point is not clearly Black's or White's and a stone sits on it,
    the stone is assumed alive.
    """
    judgement = ownermap.judge_point(point, threshold)
    stone = board.at(point)

    if judgement not in (PointJudgement.BLACK, PointJudgement.WHITE) and stone is not None:
        return judgement_for_color(stone)
    return judgement


def score_estimate(
    board: BoardState,
    ownermap: OwnerMap,
    threshold: float = LOOSE_THRESHOLD,
) -> float:
    """
    Estimated final score, from White's point of view.

    White's points plus komi and handicap compensation, minus Black's points.
    """
    ownermap.check_board(board)
    tally = Counter(
        score_estimate_point(board, ownermap, point, threshold)
        for point in board.points()
    )

    handicap_comp = board.handicap_compensation()
    score = (
        tally[PointJudgement.WHITE] + board.komi + handicap_comp
    ) - tally[PointJudgement.BLACK]

    logger.debug(
        "Score estimate %.1f (B=%d, W=%d, komi=%.1f, handicap=%d)",
        score, tally[PointJudgement.BLACK], tally[PointJudgement.WHITE],
        board.komi, handicap_comp,
    )
    return float(score)


def score_estimate_for(
    board: BoardState,
    ownermap: OwnerMap,
    color: str,
    threshold: float = LOOSE_THRESHOLD,
) -> float:
    """Estimated score from `color`'s point of view (positive = ahead)."""
    if color not in (BLACK, WHITE):
        raise ValueError(f"Color must be 'B' or 'W', got {color}")
    score = score_estimate(board, ownermap, threshold)
    return -score if color == BLACK else score


def score_estimate_label(
    board: BoardState,
    ownermap: OwnerMap,
    threshold: float = LOOSE_THRESHOLD,
) -> str:
    """Human-readable estimate, e.g. "W+1.5" or "B+3.0"."""
    score = score_estimate(board, ownermap, threshold)
    leader = WHITE if score > 0 else BLACK
    return f"{leader}+{abs(score):.1f}"
