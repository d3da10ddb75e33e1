"""Task scheduler port - background job queue."""

from typing import Any, Protocol


class TaskScheduler(Protocol):
    """Port for enqueueing named background tasks."""

    async def schedule(self, name: str, payload: dict[str, Any]) -> None: ...
