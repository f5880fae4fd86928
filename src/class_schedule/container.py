from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Optional

from .core.constants import DEFAULT_HORIZON_MONTHS, REMINDER_INTERVAL_SECONDS
from .core.exceptions import ValidationError
from .database.connection import DBConfig, DatabaseConnection
from .persistence.gateway import PersistenceGateway
from .persistence.memory import InMemoryGateway, InMemoryStore
from .persistence.mysql_gateway import MySQLGateway
from .reminders.notifier import LoggingNotifier, Notifier
from .session import UserSession

logger = logging.getLogger(__name__)

GatewayFactory = Callable[[str], PersistenceGateway]


class SessionRegistry:
    """One loaded UserSession per signed-in user, created on first use."""

    def __init__(
        self,
        gateway_factory: GatewayFactory,
        *,
        notifier_factory: Callable[[str], Notifier] = lambda _user_id: LoggingNotifier(),
        reminder_interval_seconds: float = REMINDER_INTERVAL_SECONDS,
    ):
        self._gateway_factory = gateway_factory
        self._notifier_factory = notifier_factory
        self._interval = reminder_interval_seconds
        self._sessions: dict[str, UserSession] = {}
        self._lock = threading.Lock()

    def get(self, user_id: str) -> UserSession:
        with self._lock:
            session = self._sessions.get(user_id)
            if session is None:
                session = UserSession(
                    user_id,
                    self._gateway_factory(user_id),
                    notifier=self._notifier_factory(user_id),
                    reminder_interval_seconds=self._interval,
                )
                session.load()
                self._sessions[user_id] = session
            return session

    def close(self, user_id: str) -> None:
        with self._lock:
            session = self._sessions.pop(user_id, None)
        if session is not None:
            session.close()

    def close_all(self) -> None:
        with self._lock:
            sessions, self._sessions = list(self._sessions.values()), {}
        for session in sessions:
            session.close()


@dataclass(frozen=True)
class Container:
    gateway_factory: GatewayFactory
    sessions: SessionRegistry
    default_horizon_months: int = DEFAULT_HORIZON_MONTHS


def build_gateway_factory(*, backend: str, db_config: Optional[dict] = None, store: Optional[InMemoryStore] = None) -> GatewayFactory:
    if backend == "memory":
        store = store or InMemoryStore()
        return lambda user_id: InMemoryGateway(store, user_id)

    if backend == "mysql":
        if not db_config:
            raise ValidationError("DB_CONFIG is required for the mysql backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        return lambda user_id: MySQLGateway(conn, user_id)

    raise ValidationError(f"Unknown persistence backend: {backend}")


def build_container(
    *,
    backend: str = "mysql",
    db_config: Optional[dict] = None,
    store: Optional[InMemoryStore] = None,
    notifier_factory: Optional[Callable[[str], Notifier]] = None,
    reminder_interval_seconds: float = REMINDER_INTERVAL_SECONDS,
    default_horizon_months: int = DEFAULT_HORIZON_MONTHS,
) -> Container:
    gateway_factory = build_gateway_factory(backend=backend, db_config=db_config, store=store)
    registry_kwargs = {"reminder_interval_seconds": reminder_interval_seconds}
    if notifier_factory is not None:
        registry_kwargs["notifier_factory"] = notifier_factory

    logger.debug("Container built with %s backend", backend)
    return Container(
        gateway_factory=gateway_factory,
        sessions=SessionRegistry(gateway_factory, **registry_kwargs),
        default_horizon_months=int(default_horizon_months),
    )
