from typing import Callable, Dict, List, Optional
from board.client import ApiError
from board.controller import Outcome, ReconciliationController
from board.events import EventBus, TASKS_CHANGED
from board.models import COLUMNS, DragResult, Partition, Task
from board.notice import Notice
from settings import logger

LOAD_FAILED_MESSAGE = "Failed to load tasks. Please try again."


class TaskBoard:
    """Three-column task board bound to the task API.

    The board fetches on :meth:`mount`, on :meth:`set_filter` and whenever
    ``TASKS_CHANGED`` is published on the bus while it is mounted.
    """

    def __init__(
        self,
        api,
        bus: EventBus,
        notice: Optional[Notice] = None,
        confirm: Optional[Callable[[str], bool]] = None,
        on_change: Optional[Callable[[Partition], None]] = None,
        status_filter: Optional[str] = None
    ):
        self.api = api
        self.bus = bus
        self.notice = notice or Notice()
        self.status_filter = status_filter
        self.confirm = confirm
        self.on_change = on_change
        self.controller = self._new_controller()
        self.controller.close()
        self.mounted = False
        self._unsubscribe: Optional[Callable[[], None]] = None

    def _new_controller(self) -> ReconciliationController:
        return ReconciliationController(
            self.api, notice=self.notice, confirm=self.confirm, on_change=self.on_change
        )

    @property
    def columns(self) -> Partition:
        return self.controller.partition

    def counts(self) -> Dict[str, int]:
        return {column: len(self.columns[column]) for column in COLUMNS}

    def tasks_in(self, column: str) -> List[Task]:
        return list(self.columns[column])

    async def mount(self) -> None:
        if self.mounted:
            return
        self.mounted = True
        # Requests still in flight from an earlier mount resolve against the old, closed controller
        self.controller = self._new_controller()
        self._unsubscribe = self.bus.subscribe(TASKS_CHANGED, self._on_tasks_changed)
        await self.refresh()

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.mounted = False
        self.controller.close()
        self.notice.clear()

    async def set_filter(self, status: Optional[str]) -> None:
        """Show only one column's tasks, or all of them with None."""
        if status is not None and status not in COLUMNS:
            raise ValueError(f"Status must be one of: {', '.join(COLUMNS)}")
        self.status_filter = status
        await self.refresh()

    async def refresh(self) -> None:
        """Rebuild the board from the server's task list."""
        controller = self.controller
        try:
            tasks = await self.api.list_tasks(status=self.status_filter)
        except ApiError as e:
            if not controller.closed:
                logger.warning("Could not load tasks", extra={"error": e.message})
                self.notice.show(LOAD_FAILED_MESSAGE)
            return

        if controller.closed:
            return
        controller.load(tasks)

    async def on_drag_end(self, result: DragResult) -> Outcome:
        return await self.controller.handle_drag_end(result)

    async def delete_task(self, task_id: str) -> Outcome:
        return await self.controller.delete_task(task_id)

    async def _on_tasks_changed(self, **kwargs) -> None:
        await self.refresh()
