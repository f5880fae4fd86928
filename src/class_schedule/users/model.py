from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_USER_NAME


@dataclass(frozen=True)
class UserProfile:
    user_name: str = DEFAULT_USER_NAME

    def to_dict(self) -> dict:
        return {"userName": self.user_name}
