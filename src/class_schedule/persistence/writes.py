from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Optional, TypeVar

from ..core.exceptions import PersistenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class WriteResult:
    """Outcome of one durable write."""

    operation: str
    record_id: str
    ok: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class Mutation(Generic[T]):
    """What a state-changing operation returns.

    The in-memory change is already applied; writes tell whether it also reached
    the durable store.
    """

    value: T
    writes: tuple[WriteResult, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return all(w.ok for w in self.writes)

    @property
    def failed_writes(self) -> list[WriteResult]:
        return [w for w in self.writes if not w.ok]


class DurableWriter:
    """Runs gateway writes after the in-memory update.

    A PersistenceError is logged and turned into a failed WriteResult; the
    in-memory state is not rolled back.
    """

    def __init__(self, *, user_id: str):
        self._user_id = user_id

    def write(self, operation: str, record_id: str, fn: Callable[..., Any], *args: Any) -> WriteResult:
        try:
            fn(*args)
        except PersistenceError as e:
            logger.error("user=%s %s(%s) failed: %s", self._user_id, operation, record_id, e)
            return WriteResult(operation=operation, record_id=record_id, ok=False, error=str(e))
        return WriteResult(operation=operation, record_id=record_id, ok=True)
