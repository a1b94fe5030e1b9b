"""Auth phase transitions."""

import pytest

from anlik_eleman.auth.state import (
    SETTLED_PHASES,
    TRANSITIONS,
    AuthPhase,
    AuthState,
    InvalidTransition,
    transition,
    update,
)


def test_initial_state():
    state = AuthState()
    assert state.phase is AuthPhase.UNINITIALIZED
    assert state.loading is True
    assert state.error is None
    assert not state.is_authenticated


def test_transition_applies_changes():
    state = transition(AuthState(), AuthPhase.INITIALIZING, error=None)
    state = transition(state, AuthPhase.ANONYMOUS, loading=False)

    assert state.phase is AuthPhase.ANONYMOUS
    assert state.loading is False


@pytest.mark.parametrize(
    "source, target",
    [
        (AuthPhase.UNINITIALIZED, AuthPhase.READY),
        (AuthPhase.ANONYMOUS, AuthPhase.PROVISIONING),
        (AuthPhase.READY, AuthPhase.PROVISIONING),
        (AuthPhase.PROVISIONING, AuthPhase.LOADING_PROFILE),
        (AuthPhase.READY, AuthPhase.INITIALIZING),
    ],
)
def test_illegal_transitions_raise(source, target):
    with pytest.raises(InvalidTransition) as exc:
        transition(AuthState(phase=source), target)
    assert exc.value.source is source
    assert exc.value.target is target


def test_settled_phases_can_restart_profile_load():
    for phase in SETTLED_PHASES:
        assert AuthPhase.LOADING_PROFILE in TRANSITIONS[phase]
        assert AuthPhase.ANONYMOUS in TRANSITIONS[phase]


def test_provisioning_only_reachable_from_profile_load():
    sources = {phase for phase, targets in TRANSITIONS.items() if AuthPhase.PROVISIONING in targets}
    assert sources == {AuthPhase.LOADING_PROFILE}


def test_update_keeps_phase():
    state = AuthState(phase=AuthPhase.READY, loading=False)
    state = update(state, error="Profil güncellenemedi")

    assert state.phase is AuthPhase.READY
    assert state.error == "Profil güncellenemedi"
    with pytest.raises(ValueError):
        update(state, phase=AuthPhase.ANONYMOUS)
