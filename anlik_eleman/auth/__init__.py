"""Session/profile bootstrap."""

from anlik_eleman.auth.connectivity import always_online, host_reachable, online_check_for
from anlik_eleman.auth.gateway import AuthGateway, PlatformAuthGateway
from anlik_eleman.auth.provisioning import CompanyProvisioning, CompanyProvisioningStatus
from anlik_eleman.auth.state import AuthPhase, AuthState, InvalidTransition, transition
from anlik_eleman.auth.store import SessionStore

__all__ = [
    "always_online",
    "host_reachable",
    "online_check_for",
    "AuthGateway",
    "PlatformAuthGateway",
    "CompanyProvisioning",
    "CompanyProvisioningStatus",
    "AuthPhase",
    "AuthState",
    "InvalidTransition",
    "transition",
    "SessionStore",
]
