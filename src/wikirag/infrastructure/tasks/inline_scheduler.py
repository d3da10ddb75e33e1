"""In-process task scheduler."""

from typing import Any

from wikirag.application.tasks import TaskTable, dispatch


class InlineTaskScheduler:
    """Runs scheduled tasks immediately in the current event loop.

    Stands in for an external queue; errors propagate to the caller.
    """

    def __init__(self, tasks: TaskTable | None = None) -> None:
        self._tasks: TaskTable = tasks if tasks is not None else {}

    def bind(self, tasks: TaskTable) -> None:
        """Attach the task table once it is built (tasks may schedule tasks)."""
        self._tasks = tasks

    async def schedule(self, name: str, payload: dict[str, Any]) -> None:
        await dispatch(self._tasks, name, payload)
