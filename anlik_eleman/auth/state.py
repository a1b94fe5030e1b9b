"""
Auth bootstrap state machine.

``AuthState`` is an immutable snapshot of the current user as seen by pages.
Every phase change goes through ``transition()``, which rejects moves that
are not in ``TRANSITIONS`` (e.g. entering PROVISIONING from ANONYMOUS).
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from anlik_eleman.db.rows import Profile
from anlik_eleman.remote.models import AuthIdentity, Session


class AuthPhase(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    ANONYMOUS = "anonymous"
    LOADING_PROFILE = "loading_profile"
    PROVISIONING = "provisioning"
    READY = "ready"
    ERRORED = "errored"


TRANSITIONS: dict[AuthPhase, frozenset[AuthPhase]] = {
    AuthPhase.UNINITIALIZED: frozenset({AuthPhase.INITIALIZING}),
    AuthPhase.INITIALIZING: frozenset(
        {AuthPhase.ANONYMOUS, AuthPhase.LOADING_PROFILE, AuthPhase.ERRORED}
    ),
    AuthPhase.LOADING_PROFILE: frozenset(
        {AuthPhase.READY, AuthPhase.PROVISIONING, AuthPhase.ERRORED}
    ),
    AuthPhase.PROVISIONING: frozenset({AuthPhase.READY, AuthPhase.ERRORED}),
    # Settled phases restart from an auth change, a sign-out or a profile reload
    AuthPhase.READY: frozenset({AuthPhase.LOADING_PROFILE, AuthPhase.ANONYMOUS}),
    AuthPhase.ANONYMOUS: frozenset({AuthPhase.LOADING_PROFILE, AuthPhase.ANONYMOUS}),
    AuthPhase.ERRORED: frozenset({AuthPhase.LOADING_PROFILE, AuthPhase.ANONYMOUS}),
}

SETTLED_PHASES = frozenset({AuthPhase.READY, AuthPhase.ANONYMOUS, AuthPhase.ERRORED})
BUSY_PHASES = frozenset({AuthPhase.INITIALIZING, AuthPhase.LOADING_PROFILE, AuthPhase.PROVISIONING})


class InvalidTransition(RuntimeError):
    def __init__(self, source: AuthPhase, target: AuthPhase):
        super().__init__(f"Illegal auth transition {source.value} -> {target.value}")
        self.source = source
        self.target = target


@dataclass(frozen=True)
class AuthState:
    phase: AuthPhase = AuthPhase.UNINITIALIZED
    user: AuthIdentity | None = None
    session: Session | None = None
    profile: Profile | None = None
    loading: bool = True
    error: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


def transition(state: AuthState, phase: AuthPhase, **changes: Any) -> AuthState:
    """Move ``state`` to ``phase``, applying ``changes`` to the other fields."""
    if phase not in TRANSITIONS[state.phase]:
        raise InvalidTransition(state.phase, phase)
    return replace(state, phase=phase, **changes)


def update(state: AuthState, **changes: Any) -> AuthState:
    """Change non-phase fields (loading, error) without a phase transition."""
    if "phase" in changes:
        raise ValueError("use transition() to change the phase")
    return replace(state, **changes)
