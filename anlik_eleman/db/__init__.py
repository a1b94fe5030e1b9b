"""Data access façade.

Every request takes the ``PlatformClient`` first and returns a ``Result``;
none of them raise.
"""

from anlik_eleman.db.base import NOT_FOUND_CODE, Result, ServiceError, service_call
from anlik_eleman.db.rows import (
    Application,
    Company,
    CompanyInsert,
    JobCategory,
    JobFilters,
    JobPosting,
    JobPostingCreate,
    Notification,
    Profile,
    ProfileInsert,
)

__all__ = [
    "NOT_FOUND_CODE",
    "Result",
    "ServiceError",
    "service_call",
    "Application",
    "Company",
    "CompanyInsert",
    "JobCategory",
    "JobFilters",
    "JobPosting",
    "JobPostingCreate",
    "Notification",
    "Profile",
    "ProfileInsert",
]
