"""
Go Ownership Statistics

Accumulates territorial ownership over Monte-Carlo playouts and derives point
verdicts, group life/death status and score estimates from it.
"""

__version__ = "0.1.0"

from .board import BoardState, create_board
from .groups import GroupJudgement, GroupStatus, judge_groups, groups_of_status
from .ownermap import (
    OwnerMap,
    OwnerMapError,
    EmptyOwnerMapError,
    BoardSizeMismatchError,
    UnresolvedGroupError,
    PointJudgement,
    merge_ownermaps,
)
from .score import score_estimate, score_estimate_for, score_estimate_label

__all__ = [
    "BoardState",
    "create_board",
    "OwnerMap",
    "OwnerMapError",
    "EmptyOwnerMapError",
    "BoardSizeMismatchError",
    "UnresolvedGroupError",
    "PointJudgement",
    "merge_ownermaps",
    "GroupJudgement",
    "GroupStatus",
    "judge_groups",
    "groups_of_status",
    "score_estimate",
    "score_estimate_for",
    "score_estimate_label",
]
