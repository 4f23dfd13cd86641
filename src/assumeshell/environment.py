"""Environment changes handed to the spawned shell.

``plan`` is pure and returns an ``EnvironmentDelta``; ``apply`` is the single
place that writes to the process environment.
"""

import logging
import os
from dataclasses import dataclass
from typing import MutableMapping, Union

from assumeshell.auth import Credentials
from assumeshell.resolver import ResolvedSession

logger = logging.getLogger(__name__)

AWS_PROFILE = "AWS_PROFILE"
AWS_DEFAULT_REGION = "AWS_DEFAULT_REGION"
AWS_ACCESS_KEY_ID = "AWS_ACCESS_KEY_ID"
AWS_SECRET_ACCESS_KEY = "AWS_SECRET_ACCESS_KEY"
AWS_SESSION_TOKEN = "AWS_SESSION_TOKEN"

_SECRET_VARS = {AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY, AWS_SESSION_TOKEN}


@dataclass(frozen=True)
class SetVar:
    value: str

    def __repr__(self) -> str:
        return "SetVar(...)"


@dataclass(frozen=True)
class UnsetVar:
    pass


Action = Union[SetVar, UnsetVar]
EnvironmentDelta = tuple[tuple[str, Action], ...]


def plan(resolved: ResolvedSession, credentials: Credentials | None = None) -> EnvironmentDelta:
    """Compute the variables to set or unset for ``resolved``."""
    if not resolved.profile_name and not resolved.region:
        return (
            (AWS_PROFILE, UnsetVar()),
            (AWS_DEFAULT_REGION, UnsetVar()),
        )

    if not resolved.profile_name:
        return ((AWS_DEFAULT_REGION, SetVar(resolved.region)),)

    delta = [
        (AWS_PROFILE, SetVar(resolved.profile_name)),
        (AWS_DEFAULT_REGION, SetVar(resolved.region or "")),
    ]
    if credentials is not None:
        delta += [
            (AWS_ACCESS_KEY_ID, SetVar(credentials.access_key_id)),
            (AWS_SECRET_ACCESS_KEY, SetVar(credentials.secret_access_key)),
            (AWS_SESSION_TOKEN, SetVar(credentials.session_token)),
        ]
    return tuple(delta)


def apply(delta: EnvironmentDelta, environ: MutableMapping[str, str] = os.environ) -> None:
    """Write ``delta`` into ``environ``. Unsetting an absent variable is a no-op."""
    for name, action in delta:
        if isinstance(action, SetVar):
            environ[name] = action.value
            logger.debug("set %s%s", name, "" if name in _SECRET_VARS else f"={action.value}")
        else:
            environ.pop(name, None)
            logger.debug("unset %s", name)
