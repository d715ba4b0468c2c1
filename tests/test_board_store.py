"""
Feature: Board state store
  As the task board
  I want to group tasks by status and compute drag results as new values
  So that the current board can always be kept as a rollback snapshot

Scenario: Partition a flat task list
  Given tasks with known and unknown statuses
  When they are partitioned
  Then each known task lands in its column in the order received
  And tasks with an unknown status appear in no column

Scenario: Move a task between columns
  Given a partition with two pending tasks
  When the first is moved to in-progress
  Then it leaves pending, appears in in-progress with status "in-progress"
  And the input partition is untouched
"""

from board.models import COLUMNS
from models.tasks import TaskStatus
from board.store import apply_move, find_task, partition, remove_task, snapshot
from fakes import make_task


def _ids(board):
    return {column: [task.id for task in tasks] for column, tasks in board.items()}


def test_partition_groups_tasks_in_received_order():
    tasks = [
        make_task("t1", "pending"),
        make_task("t2", "completed"),
        make_task("t3", "pending"),
        make_task("t4", "in-progress"),
    ]

    board = partition(tasks)

    assert tuple(board) == COLUMNS
    assert _ids(board) == {
        "pending": ["t1", "t3"],
        "in-progress": ["t4"],
        "completed": ["t2"],
    }


def test_partition_drops_unknown_status():
    # Scenario E
    board = partition([make_task("t1", "archived")])

    assert all(tasks == [] for tasks in board.values())
    assert find_task(board, "t1") is None


def test_partition_of_nothing_has_three_empty_columns():
    assert partition([]) == {"pending": [], "in-progress": [], "completed": []}


def test_move_to_same_position_is_identity():
    board = partition([make_task("t1"), make_task("t2"), make_task("t3", "completed")])

    result = apply_move(board, "pending", 1, "pending", 1)

    assert result == board
    assert result is not board


def test_cross_column_move():
    # Scenario A
    t1, t2 = make_task("t1"), make_task("t2")
    board = partition([t1, t2])

    result = apply_move(board, "pending", 0, "in-progress", 0)

    assert _ids(result) == {"pending": ["t2"], "in-progress": ["t1"], "completed": []}
    assert result["in-progress"][0].status == "in-progress"
    assert result["in-progress"][0].title == t1.title
    # input untouched
    assert _ids(board) == {"pending": ["t1", "t2"], "in-progress": [], "completed": []}
    assert board["pending"][0].status == "pending"


def test_cross_column_move_preserves_task_count():
    board = partition([
        make_task("t1"), make_task("t2"), make_task("t3", "in-progress"), make_task("t4", "completed"),
    ])

    result = apply_move(board, "pending", 1, "completed", 1)

    assert sum(len(tasks) for tasks in result.values()) == 4
    assert _ids(result)["completed"] == ["t4", "t2"]
    assert result["completed"][1].status == "completed"


def test_reorder_within_column_keeps_status():
    board = partition([make_task("t1"), make_task("t2"), make_task("t3")])

    result = apply_move(board, "pending", 0, "pending", 2)

    assert _ids(result)["pending"] == ["t2", "t3", "t1"]
    assert all(task.status == "pending" for task in result["pending"])


def test_move_then_inverse_restores_membership():
    board = partition([make_task("t1"), make_task("t2"), make_task("t3", "completed")])

    moved = apply_move(board, "pending", 0, "completed", 1)
    restored = apply_move(moved, "completed", 1, "pending", 0)

    assert _ids(restored) == _ids(board)
    assert restored["pending"][0].status == "pending"


def test_snapshot_is_independent_copy():
    board = partition([make_task("t1")])

    copy = snapshot(board)
    copy["pending"].append(make_task("t2"))

    assert _ids(board)["pending"] == ["t1"]


def test_remove_task():
    board = partition([make_task("t1"), make_task("t2"), make_task("t3", "completed")])

    result = remove_task(board, "t2")

    assert _ids(result) == {"pending": ["t1"], "in-progress": [], "completed": ["t3"]}
    assert find_task(board, "t2") == ("pending", 1)


def test_columns_match_server_statuses():
    assert COLUMNS == tuple(status.value for status in TaskStatus)
