"""Identity provider contract.

The engine never looks up the current user itself; callers pass an
identity provider, and a missing user is a distinct error.
"""

from typing import Protocol

from runplan.plans.errors import IdentityUnavailableError


class IdentityProvider(Protocol):
    def current_user_id(self) -> str | None: ...


class StaticIdentityProvider:
    """Identity provider returning a fixed user id (CLI, tests, workers)."""

    def __init__(self, user_id: str | None):
        self._user_id = user_id

    def current_user_id(self) -> str | None:
        return self._user_id


def require_user_id(provider: IdentityProvider) -> str:
    """Current user id, or IdentityUnavailableError when nobody is signed in."""
    user_id = provider.current_user_id()
    if not user_id:
        raise IdentityUnavailableError("No current user available to own the training plan")
    return user_id
