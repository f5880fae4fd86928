from __future__ import annotations

from ..common.validators import require_non_empty
from ..persistence.gateway import PersistenceGateway
from ..persistence.writes import DurableWriter, Mutation
from ..state import PROFILE, ScheduleState
from .model import UserProfile


class ProfileService:
    """Use case: the student's display name."""

    def __init__(self, state: ScheduleState, gateway: PersistenceGateway, writer: DurableWriter):
        self._state = state
        self._gateway = gateway
        self._writer = writer

    def get(self) -> UserProfile:
        return self._state.profile

    def set_user_name(self, user_name: str) -> Mutation[UserProfile]:
        profile = UserProfile(user_name=require_non_empty(user_name, "User name"))
        with self._state.lock:
            self._state.profile = profile
            self._state.notify(PROFILE)
            result = self._writer.write("save_user_profile", self._gateway.user_id, self._gateway.save_user_profile, profile)
        return Mutation(profile, (result,))
