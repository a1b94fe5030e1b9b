"""
Lazy provisioning of the rows every signed-in identity needs.

A profile is built from the sign-up metadata the first time an identity is
seen without one. Employers additionally get a company record when their
sign-up carried a company name; that step reports a ``CompanyProvisioning``
outcome instead of raising, since the account is usable without it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, TYPE_CHECKING

from anlik_eleman.db.base import ServiceError
from anlik_eleman.db.rows import USER_TYPES, Company, CompanyInsert, Profile, ProfileInsert

if TYPE_CHECKING:
    from anlik_eleman.auth.gateway import AuthGateway

logger = logging.getLogger(__name__)

DEFAULT_USER_TYPE = "job_seeker"


def _text(metadata: dict[str, Any], key: str) -> str:
    value = metadata.get(key)
    return str(value).strip() if value else ""


def build_profile_row(user_id: str, metadata: dict[str, Any]) -> ProfileInsert:
    """Profile insert for a new identity, with default flags."""
    user_type = _text(metadata, "user_type") or DEFAULT_USER_TYPE
    if user_type not in USER_TYPES:
        logger.warning(f"Unknown user_type {user_type!r} in metadata for {user_id}, using {DEFAULT_USER_TYPE}")
        user_type = DEFAULT_USER_TYPE

    return ProfileInsert(
        id=user_id,
        first_name=_text(metadata, "first_name"),
        last_name=_text(metadata, "last_name"),
        user_type=user_type,
        phone=_text(metadata, "phone") or None,
        city=_text(metadata, "city") or None,
        is_active=True,
        is_verified=False,
        is_premium=False,
        is_approved=False,
    )


def build_company_row(profile: Profile, metadata: dict[str, Any]) -> CompanyInsert | None:
    """Company insert for an employer, or None without a company name."""
    name = _text(metadata, "company_name")
    if not name:
        return None
    return CompanyInsert(
        owner_id=profile.id,
        name=name,
        city=profile.city or _text(metadata, "city"),
        description=_text(metadata, "company_description") or None,
        website=_text(metadata, "company_website") or None,
        phone=_text(metadata, "phone") or None,
        email=_text(metadata, "email") or None,
        employee_count=_text(metadata, "employee_count") or None,
        is_verified=False,
    )


class CompanyProvisioningStatus(str, Enum):
    CREATED = "created"
    EXISTS = "exists"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True)
class CompanyProvisioning:
    """Outcome of the employer company step. Never propagated as an error."""

    status: CompanyProvisioningStatus
    company: Company | None = None
    error: ServiceError | None = None

    @property
    def failed(self) -> bool:
        return self.status is CompanyProvisioningStatus.FAILED


async def provision_company(
    gateway: "AuthGateway", profile: Profile, metadata: dict[str, Any]
) -> CompanyProvisioning:
    """Create the employer's company unless one already exists."""
    exists = await gateway.company_exists_for_owner(profile.id)
    if exists.error:
        return CompanyProvisioning(CompanyProvisioningStatus.FAILED, error=exists.error)
    if exists.data:
        logger.info(f"Company already exists for employer {profile.id}")
        return CompanyProvisioning(CompanyProvisioningStatus.EXISTS)

    row = build_company_row(profile, metadata)
    if row is None:
        logger.info(f"No company name in metadata for {profile.id}, skipping company creation")
        return CompanyProvisioning(CompanyProvisioningStatus.SKIPPED)

    created = await gateway.insert_company(row)
    if created.error:
        return CompanyProvisioning(CompanyProvisioningStatus.FAILED, error=created.error)
    return CompanyProvisioning(CompanyProvisioningStatus.CREATED, company=created.data)
