"""The account performing the push."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from commitguard.config.schema import ConfigError, UserConfig

# Hosting servers export the pushing account under different names.
_ACCOUNT_ENV_VARS = ("COMMITGUARD_USER", "GL_USERNAME", "REMOTE_USER")


class UserType(str, Enum):
    NORMAL = "normal"
    SERVICE = "service"


@dataclass(frozen=True)
class AuthenticatedUser:
    name: Optional[str] = None  # account name, matched against excludeUsers
    display_name: Optional[str] = None
    email: Optional[str] = None
    type: UserType = UserType.NORMAL

    @property
    def is_service(self) -> bool:
        return self.type == UserType.SERVICE


def _parse_type(value: str) -> UserType:
    try:
        return UserType(value.strip().lower())
    except ValueError:
        raise ConfigError(f"Unknown user type: {value!r} (expected normal | service)")


def resolve_user(config: Optional[UserConfig] = None) -> AuthenticatedUser:
    """Build the pushing user from the environment, falling back to *config*."""
    config = config or UserConfig()
    name = next((os.environ[v] for v in _ACCOUNT_ENV_VARS if os.environ.get(v)), None)
    return AuthenticatedUser(
        name=name or config.name,
        display_name=os.environ.get("COMMITGUARD_USER_DISPLAY_NAME") or config.display_name,
        email=os.environ.get("COMMITGUARD_USER_EMAIL") or config.email,
        type=_parse_type(os.environ.get("COMMITGUARD_USER_TYPE") or config.type),
    )
