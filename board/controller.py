"""
Optimistic reconciliation of board gestures with the task API.

Every gesture runs as a small transaction:

1. snapshot the current partition,
2. apply the change locally and publish it to the view,
3. send at most one confirming request,
4. on failure restore the snapshot and show a transient notice.

Nothing raised by the API escapes :class:`ReconciliationController`; each
gesture returns an :class:`Outcome` instead.
"""

from enum import Enum
from typing import Awaitable, Callable, Iterable, Optional
from board import store
from board.client import ApiError
from board.models import COLUMNS, DragResult, Partition, Task
from board.notice import Notice
from settings import logger

MOVE_FAILED_MESSAGE = "Failed to update task. Please try again."
DELETE_FAILED_MESSAGE = "Failed to delete task. Please try again."
DELETE_PROMPT = "Are you sure you want to delete this task?"


class Outcome(str, Enum):
    """How a gesture ended."""
    CANCELLED = "cancelled"      # dropped outside any column
    UNCHANGED = "unchanged"      # dropped where it started
    STALE = "stale"              # task not where the gesture said it was
    DECLINED = "declined"        # delete prompt answered "no"
    REORDERED = "reordered"      # same-column reorder, local only
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"
    DISCARDED = "discarded"      # resolved after the board was closed


class ReconciliationController:
    """Owns the board partition and keeps it in step with the server."""

    def __init__(
        self,
        api,
        notice: Optional[Notice] = None,
        confirm: Optional[Callable[[str], bool]] = None,
        on_change: Optional[Callable[[Partition], None]] = None
    ):
        self.api = api
        self.notice = notice or Notice()
        self.confirm = confirm
        self.on_change = on_change
        self.closed = False
        self._partition: Partition = store.empty_partition()

    @property
    def partition(self) -> Partition:
        return self._partition

    def load(self, tasks: Iterable[Task]) -> None:
        """Replace the board with a freshly fetched task list."""
        self._commit(store.partition(tasks))

    def close(self) -> None:
        """Stop applying results; requests still in flight are ignored when they resolve."""
        self.closed = True

    def _commit(self, board: Partition) -> None:
        self._partition = board
        if self.on_change is not None:
            self.on_change(board)

    async def handle_drag_end(self, result: DragResult) -> Outcome:
        """Apply a finished drag gesture."""
        source, destination = result.source, result.destination

        if destination is None or destination.column not in COLUMNS or source.column not in COLUMNS:
            return Outcome.CANCELLED

        if source.column == destination.column and source.index == destination.index:
            return Outcome.UNCHANGED

        column = self._partition[source.column]
        if source.index >= len(column) or column[source.index].id != result.task_id:
            logger.debug("Ignoring drag of task not found at its source", extra={
                "task_id": result.task_id,
                "column": source.column,
                "index": source.index
            })
            return Outcome.STALE

        moved = store.apply_move(
            self._partition, source.column, source.index, destination.column, destination.index
        )

        # Order inside a column is not persisted
        if source.column == destination.column:
            self._commit(moved)
            return Outcome.REORDERED

        return await self._reconcile(
            moved,
            lambda: self.api.update_task(result.task_id, status=destination.column),
            MOVE_FAILED_MESSAGE,
            task_id=result.task_id
        )

    async def delete_task(self, task_id: str) -> Outcome:
        """Delete a task after the user confirms."""
        if store.find_task(self._partition, task_id) is None:
            logger.debug("Ignoring delete of task not on the board", extra={"task_id": task_id})
            return Outcome.STALE

        if self.confirm is None or not self.confirm(DELETE_PROMPT):
            return Outcome.DECLINED

        return await self._reconcile(
            store.remove_task(self._partition, task_id),
            lambda: self.api.delete_task(task_id),
            DELETE_FAILED_MESSAGE,
            task_id=task_id
        )

    async def _reconcile(
        self,
        optimistic: Partition,
        confirm_remote: Callable[[], Awaitable],
        failure_message: str,
        task_id: str
    ) -> Outcome:
        rollback = store.snapshot(self._partition)
        self._commit(optimistic)

        try:
            await confirm_remote()
        except ApiError as e:
            if self.closed:
                return Outcome.DISCARDED

            logger.warning("Rolling back board change", extra={
                "task_id": task_id,
                "status_code": e.status_code,
                "error": e.message
            })
            self._commit(rollback)
            self.notice.show(failure_message)
            return Outcome.ROLLED_BACK

        if self.closed:
            return Outcome.DISCARDED
        return Outcome.COMMITTED
