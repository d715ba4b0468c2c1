"""
In-process event bus.

Components subscribe when they mount and call the returned unsubscribe
function when they unmount, so a notification only reaches live components.
"""

import inspect
from typing import Callable, Dict, List
from settings import logger

# Published after the set of tasks changed somewhere else (e.g. a task was created)
TASKS_CHANGED = "tasks_changed"


class EventBus:
    """Routes named events to subscribed callbacks."""

    def __init__(self):
        self.subscribers: Dict[str, List[Callable]] = {}

    def subscribe(self, event_type: str, callback: Callable) -> Callable[[], None]:
        """Register a callback and return a function that removes it again."""
        self.subscribers.setdefault(event_type, []).append(callback)

        def unsubscribe() -> None:
            self.unsubscribe(event_type, callback)

        return unsubscribe

    def unsubscribe(self, event_type: str, callback: Callable) -> None:
        callbacks = self.subscribers.get(event_type, [])
        if callback in callbacks:
            callbacks.remove(callback)
        if not callbacks:
            self.subscribers.pop(event_type, None)

    def subscriber_count(self, event_type: str) -> int:
        return len(self.subscribers.get(event_type, []))

    async def publish(self, event_type: str, **kwargs) -> None:
        """Deliver an event to every subscriber, awaiting async callbacks."""
        # Copy so callbacks may unsubscribe while being notified
        for callback in list(self.subscribers.get(event_type, [])):
            try:
                result = callback(**kwargs)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error("Event subscriber failed", extra={
                    "event_type": event_type,
                    "error": str(e)
                })
