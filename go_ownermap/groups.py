"""
Group life/death judgement from ownership statistics.

Every stone of a group votes on the group's fate using its point verdict:
a verdict matching the stone's color says alive, the opposing color says dead.
Any unclear point, dame under a stone, or disagreement between stones makes
the group UNKNOWN, and UNKNOWN never resolves again within a pass.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .board import BoardState, Point, other_color
from .config import GJ_THRESHOLD
from .ownermap import OwnerMap, PointJudgement, UnresolvedGroupError, judgement_for_color

logger = logging.getLogger(__name__)


class GroupStatus(Enum):
    """Fate of a group."""
    NONE = "none"          # not resolved yet
    ALIVE = "alive"
    DEAD = "dead"
    UNKNOWN = "unknown"


@dataclass
class GroupJudgement:
    """Status of every group on a board after a judgement pass."""
    threshold: float = GJ_THRESHOLD
    status: Dict[Point, GroupStatus] = field(default_factory=dict)

    def groups(self, status: GroupStatus) -> List[Point]:
        """Group ids with the given status, in insertion order."""
        return [g for g, s in self.status.items() if s == status]

    def summary(self) -> Dict[str, int]:
        counts = Counter(s.value for s in self.status.values())
        return dict(counts)


def _stone_vote(judgement: PointJudgement, color: str) -> GroupStatus:
    """What a single stone's point verdict says about its group."""
    if judgement == judgement_for_color(color):
        return GroupStatus.ALIVE
    if judgement == judgement_for_color(other_color(color)):
        return GroupStatus.DEAD
    # Dame under a stone
    return GroupStatus.UNKNOWN


def judge_groups(
    board: BoardState,
    ownermap: OwnerMap,
    threshold: float = GJ_THRESHOLD,
    order: Optional[Iterable[Point]] = None,
) -> GroupJudgement:
    """
    Classify every group on the board as alive, dead or unknown.

    Args:
        board: Position whose groups are judged
        ownermap: Accumulated playout statistics for that board
        threshold: Point judgement threshold
        order: Points to scan instead of board scan order; the result does
               not depend on it

    Returns:
        GroupJudgement with a status for every group on the board
    """
    ownermap.check_board(board)
    groups = board.group_map()

    judgement = GroupJudgement(threshold=threshold)
    for point in board.points():
        group = groups.get(point)
        if group is not None:
            judgement.status[group] = GroupStatus.NONE

    gs = judgement.status
    for point in (board.points() if order is None else order):
        group = groups.get(point)
        if group is None:
            continue

        pj = ownermap.judge_point(point, threshold)
        if pj == PointJudgement.UNKNOWN:
            gs[group] = GroupStatus.UNKNOWN
            continue
        if gs[group] == GroupStatus.UNKNOWN:
            continue

        vote = _stone_vote(pj, board.at(point))
        if gs[group] == GroupStatus.NONE:
            gs[group] = vote
        elif gs[group] != vote:
            logger.debug("Stones of group %s disagree, marking unknown", group)
            gs[group] = GroupStatus.UNKNOWN

    logger.debug("Judged %d groups at %.2f: %s", len(gs), threshold, judgement.summary())
    return judgement


def groups_of_status(
    board: BoardState,
    judgement: GroupJudgement,
    status: GroupStatus,
    queue: Optional[List[Point]] = None,
) -> List[Point]:
    """
    Append the ids of groups with `status` to `queue`, in board scan order.

    Args:
        board: Position the judgement was made on
        judgement: Result of judge_groups()
        status: Status to select
        queue: Caller-owned list to append to (a new list if omitted)

    Returns:
        The queue

    Raises:
        UnresolvedGroupError: If a group on the board has no resolved status
    """
    if queue is None:
        queue = []
    groups = board.group_map()

    for point in board.points():
        group = groups.get(point)
        if group is None or group != point:
            continue

        current = judgement.status.get(group, GroupStatus.NONE)
        if current == GroupStatus.NONE:
            raise UnresolvedGroupError(f"Group at {point} has not been judged")
        if current == status:
            queue.append(group)

    return queue
