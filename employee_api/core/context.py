# employee_api/core/context.py
import threading
import time
from typing import Optional

from employee_api.core.errors import DeadlineExceededError


class RequestContext:
    """Deadline and cancellation flag carried through service and repository."""

    def __init__(self, timeout: Optional[float] = None):
        self.deadline: Optional[float] = (
            time.monotonic() + timeout if timeout is not None else None
        )
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def check(self) -> None:
        if self.cancelled:
            raise DeadlineExceededError("context canceled")
        if self.expired:
            raise DeadlineExceededError("context deadline exceeded")
