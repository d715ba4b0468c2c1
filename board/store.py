"""
Board state store.

Pure functions over a :data:`~board.models.Partition`. None of them mutate
their input: every change produces a new partition, which is what lets the
reconciliation controller keep an untouched snapshot to roll back to.
"""

from typing import Iterable, Optional, Tuple
from board.models import COLUMNS, Partition, Task


def empty_partition() -> Partition:
    return {column: [] for column in COLUMNS}


def partition(tasks: Iterable[Task]) -> Partition:
    """Group tasks by status, keeping the order received.

    Tasks whose status is not a board column are dropped.
    """
    result = empty_partition()
    for task in tasks:
        if task.status in result:
            result[task.status].append(task)
    return result


def snapshot(board: Partition) -> Partition:
    """Full value copy of a partition."""
    return {column: [task.model_copy() for task in tasks] for column, tasks in board.items()}


def find_task(board: Partition, task_id: str) -> Optional[Tuple[str, int]]:
    """Return ``(column, index)`` of the task, or None when it is not on the board."""
    for column, tasks in board.items():
        for index, task in enumerate(tasks):
            if task.id == task_id:
                return column, index
    return None


def apply_move(
    board: Partition,
    source_column: str,
    source_index: int,
    dest_column: str,
    dest_index: int
) -> Partition:
    """Move the task at ``source_column[source_index]`` to ``dest_column[dest_index]``.

    Within one column this is a reorder and the status is kept; across
    columns the moved copy takes ``dest_column`` as its status.
    """
    result = snapshot(board)

    if source_column == dest_column and source_index == dest_index:
        return result

    moved = result[source_column].pop(source_index)
    if source_column != dest_column:
        moved = moved.model_copy(update={"status": dest_column})

    result[dest_column].insert(dest_index, moved)
    return result


def remove_task(board: Partition, task_id: str) -> Partition:
    """Return a partition without the given task."""
    return {
        column: [task.model_copy() for task in tasks if task.id != task_id]
        for column, tasks in board.items()
    }
