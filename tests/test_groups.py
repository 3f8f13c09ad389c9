"""
Unit tests for groups.py module.

Tests:
- Alive, dead and unknown verdicts for single groups
- Contradictions between stones of one group
- Scan order independence
- Listing groups by status
"""

import pytest
import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from go_ownermap.board import BoardState
from go_ownermap.groups import (
    GroupJudgement,
    GroupStatus,
    groups_of_status,
    judge_groups,
)
from go_ownermap.ownermap import (
    BoardSizeMismatchError,
    OwnerMap,
    PointJudgement,
    UnresolvedGroupError,
)


def board_with(size: int, stones: dict) -> BoardState:
    """Board with stones {(x, y): color}."""
    board = BoardState(size=size)
    for point, color in stones.items():
        board.place(color, point)
    return board


def fill_from(ownermap: OwnerMap, position: BoardState, times: int) -> None:
    for _ in range(times):
        ownermap.fill(position)


@pytest.fixture
def lone_black():
    """3x3 board with a single black stone in the center."""
    return board_with(3, {(1, 1): "B"})


@pytest.fixture
def black_chain():
    """3x3 board with a two-stone black chain on the middle row."""
    return board_with(3, {(0, 1): "B", (1, 1): "B"})


class TestJudgeGroups:
    """Tests for judge_groups."""

    def test_alive(self, lone_black):
        """A stone owned by its color in every playout is alive."""
        ownermap = OwnerMap.for_board(lone_black)
        fill_from(ownermap, lone_black, 10)

        assert ownermap.judge_point((1, 1), 0.8) == PointJudgement.BLACK

        judgement = judge_groups(lone_black, ownermap, 0.8)
        assert judgement.status == {(1, 1): GroupStatus.ALIVE}
        assert groups_of_status(lone_black, judgement, GroupStatus.ALIVE) == [(1, 1)]

    def test_contested_is_unknown(self, lone_black):
        """A stone split evenly between colors is unknown."""
        ownermap = OwnerMap.for_board(lone_black)
        fill_from(ownermap, lone_black, 5)
        fill_from(ownermap, board_with(3, {(1, 1): "W"}), 5)

        assert ownermap.judge_point((1, 1), 0.8) == PointJudgement.UNKNOWN

        judgement = judge_groups(lone_black, ownermap, 0.8)
        assert judgement.status[(1, 1)] == GroupStatus.UNKNOWN

    def test_dead(self, lone_black):
        """A stone owned by the opponent is dead."""
        ownermap = OwnerMap.for_board(lone_black)
        fill_from(ownermap, board_with(3, {(1, 1): "W"}), 10)

        judgement = judge_groups(lone_black, ownermap)
        assert judgement.status[(1, 1)] == GroupStatus.DEAD
        assert groups_of_status(lone_black, judgement, GroupStatus.DEAD) == [(1, 1)]
        assert groups_of_status(lone_black, judgement, GroupStatus.ALIVE) == []

    def test_dame_under_stone_is_unknown(self, lone_black):
        """A dame verdict where a stone stands is inconsistent."""
        ownermap = OwnerMap.for_board(lone_black)
        fill_from(ownermap, BoardState(size=3), 10)

        assert ownermap.judge_point((1, 1), 0.8) == PointJudgement.DAME
        judgement = judge_groups(lone_black, ownermap)
        assert judgement.status[(1, 1)] == GroupStatus.UNKNOWN

    def test_chain_agreement(self, black_chain):
        """All stones agreeing gives the chain one status."""
        ownermap = OwnerMap.for_board(black_chain)
        fill_from(ownermap, black_chain, 10)

        judgement = judge_groups(black_chain, ownermap)
        assert judgement.status == {(0, 1): GroupStatus.ALIVE}

    def test_chain_contradiction(self, black_chain):
        """Stones of one chain disagreeing make it unknown."""
        ownermap = OwnerMap.for_board(black_chain)
        fill_from(ownermap, board_with(3, {(0, 1): "B", (1, 1): "W"}), 10)

        judgement = judge_groups(black_chain, ownermap)
        assert judgement.status[(0, 1)] == GroupStatus.UNKNOWN

    def test_unknown_is_absorbing(self, black_chain):
        """An unclear stone keeps its chain unknown regardless of the others."""
        ownermap = OwnerMap.for_board(black_chain)
        fill_from(ownermap, black_chain, 5)
        fill_from(ownermap, board_with(3, {(0, 1): "W", (1, 1): "B"}), 5)

        assert ownermap.judge_point((0, 1), 0.8) == PointJudgement.UNKNOWN
        assert ownermap.judge_point((1, 1), 0.8) == PointJudgement.BLACK

        judgement = judge_groups(black_chain, ownermap)
        assert judgement.status[(0, 1)] == GroupStatus.UNKNOWN

    @pytest.mark.parametrize("position", [
        {(0, 1): "B", (1, 1): "W"},
        {(0, 1): "W", (1, 1): "B"},
        {(0, 1): "B", (1, 1): "B", (2, 2): "W"},
    ])
    def test_order_independent(self, black_chain, position):
        """Scanning points in reverse gives the same snapshot."""
        board = black_chain.copy()
        board.place("W", (2, 2))
        ownermap = OwnerMap.for_board(board)
        fill_from(ownermap, board_with(3, position), 5)
        fill_from(ownermap, board, 5)

        forward = judge_groups(board, ownermap)
        backward = judge_groups(board, ownermap, order=reversed(list(board.points())))
        assert forward.status == backward.status

    def test_empty_board(self):
        """A board without stones has no groups."""
        board = BoardState(size=3)
        ownermap = OwnerMap.for_board(board)
        fill_from(ownermap, board, 3)

        judgement = judge_groups(board, ownermap)
        assert judgement.status == {}
        assert groups_of_status(board, judgement, GroupStatus.ALIVE) == []

    def test_size_mismatch(self, lone_black):
        """Judging with a map of another board raises."""
        with pytest.raises(BoardSizeMismatchError):
            judge_groups(lone_black, OwnerMap(5))

    def test_threshold_recorded(self, lone_black):
        """The snapshot remembers its threshold."""
        ownermap = OwnerMap.for_board(lone_black)
        fill_from(ownermap, lone_black, 1)
        assert judge_groups(lone_black, ownermap, 0.67).threshold == 0.67

    def test_direct_stone_write_rejudged(self, lone_black):
        """A stone written straight into the board is judged on the next pass."""
        ownermap = OwnerMap.for_board(lone_black)
        fill_from(ownermap, lone_black, 10)
        first = judge_groups(lone_black, ownermap)
        assert first.status == {(1, 1): GroupStatus.ALIVE}

        lone_black.stones[(2, 2)] = "W"
        with pytest.raises(UnresolvedGroupError):
            groups_of_status(lone_black, first, GroupStatus.ALIVE)

        second = judge_groups(lone_black, ownermap)
        assert second.status == {
            (1, 1): GroupStatus.ALIVE,
            (2, 2): GroupStatus.UNKNOWN,
        }
        assert groups_of_status(lone_black, second, GroupStatus.UNKNOWN) == [(2, 2)]


class TestGroupsOfStatus:
    """Tests for groups_of_status."""

    @pytest.fixture
    def mixed(self):
        """Two alive groups and one dead group."""
        board = board_with(3, {(0, 0): "B", (2, 0): "W", (0, 2): "B"})
        position = board_with(3, {(0, 0): "B", (2, 0): "B", (0, 2): "B"})
        ownermap = OwnerMap.for_board(board)
        fill_from(ownermap, position, 4)
        return board, judge_groups(board, ownermap)

    def test_scan_order(self, mixed):
        """Groups are listed in board scan order."""
        board, judgement = mixed
        assert groups_of_status(board, judgement, GroupStatus.ALIVE) == [(0, 0), (0, 2)]
        assert groups_of_status(board, judgement, GroupStatus.DEAD) == [(2, 0)]

    def test_appends_to_queue(self, mixed):
        """Matches are appended to a caller-owned queue."""
        board, judgement = mixed
        queue = [(1, 1)]
        result = groups_of_status(board, judgement, GroupStatus.DEAD, queue)

        assert result is queue
        assert queue == [(1, 1), (2, 0)]

    def test_each_group_once(self):
        """A multi-stone group is listed once."""
        board = board_with(3, {(0, 0): "B", (1, 0): "B", (2, 0): "B"})
        ownermap = OwnerMap.for_board(board)
        fill_from(ownermap, board, 2)

        judgement = judge_groups(board, ownermap)
        assert groups_of_status(board, judgement, GroupStatus.ALIVE) == [(0, 0)]

    def test_groups_helper(self, mixed):
        """GroupJudgement.groups lists ids by status."""
        _, judgement = mixed
        assert sorted(judgement.groups(GroupStatus.ALIVE)) == [(0, 0), (0, 2)]

    def test_unjudged_raises(self, lone_black):
        """Querying without a judgement pass raises."""
        with pytest.raises(UnresolvedGroupError):
            groups_of_status(lone_black, GroupJudgement(), GroupStatus.ALIVE)

    def test_board_changed_raises(self, lone_black):
        """A group added after the pass has no status."""
        ownermap = OwnerMap.for_board(lone_black)
        fill_from(ownermap, lone_black, 2)
        judgement = judge_groups(lone_black, ownermap)

        lone_black.place("W", (2, 2))
        with pytest.raises(UnresolvedGroupError):
            groups_of_status(lone_black, judgement, GroupStatus.ALIVE)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
