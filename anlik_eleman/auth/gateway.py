"""The requests the bootstrap issues, bound to the data access façade."""

from typing import Any, Protocol

from anlik_eleman.db import companies, identity, profiles
from anlik_eleman.db.base import Result
from anlik_eleman.db.rows import Company, CompanyInsert, Profile, ProfileInsert
from anlik_eleman.remote import AuthIdentity, PlatformClient, Session
from anlik_eleman.remote.events import AuthListener, Subscription


class AuthGateway(Protocol):
    async def get_session(self) -> Result[Session]: ...

    async def get_current_identity(self) -> Result[AuthIdentity]: ...

    def on_auth_state_change(self, listener: AuthListener) -> Subscription: ...

    async def sign_up_identity(
        self, email: str, password: str, attributes: dict[str, Any]
    ) -> Result[AuthIdentity]: ...

    async def sign_in_identity(self, email: str, password: str) -> Result[AuthIdentity]: ...

    async def sign_out_identity(self) -> Result[None]: ...

    async def get_profile_by_id(self, user_id: str) -> Result[Profile]: ...

    async def insert_profile(self, profile: ProfileInsert) -> Result[Profile]: ...

    async def update_profile(self, user_id: str, updates: dict[str, Any]) -> Result[Profile]: ...

    async def company_exists_for_owner(self, owner_id: str) -> Result[bool]: ...

    async def insert_company(self, company: CompanyInsert) -> Result[Company]: ...


class PlatformAuthGateway:
    """``AuthGateway`` backed by the hosted platform."""

    def __init__(self, client: PlatformClient):
        self.client = client

    async def get_session(self) -> Result[Session]:
        return await identity.get_session(self.client)

    async def get_current_identity(self) -> Result[AuthIdentity]:
        return await identity.get_current_identity(self.client)

    def on_auth_state_change(self, listener: AuthListener) -> Subscription:
        return identity.on_auth_state_change(self.client, listener)

    async def sign_up_identity(
        self, email: str, password: str, attributes: dict[str, Any]
    ) -> Result[AuthIdentity]:
        return await identity.sign_up_identity(self.client, email, password, attributes)

    async def sign_in_identity(self, email: str, password: str) -> Result[AuthIdentity]:
        return await identity.sign_in_identity(self.client, email, password)

    async def sign_out_identity(self) -> Result[None]:
        return await identity.sign_out_identity(self.client)

    async def get_profile_by_id(self, user_id: str) -> Result[Profile]:
        return await profiles.get_profile_by_id(self.client, user_id)

    async def insert_profile(self, profile: ProfileInsert) -> Result[Profile]:
        return await profiles.insert_profile(self.client, profile)

    async def update_profile(self, user_id: str, updates: dict[str, Any]) -> Result[Profile]:
        return await profiles.update_profile(self.client, user_id, updates)

    async def company_exists_for_owner(self, owner_id: str) -> Result[bool]:
        return await companies.company_exists_for_owner(self.client, owner_id)

    async def insert_company(self, company: CompanyInsert) -> Result[Company]:
        return await companies.insert_company(self.client, company)
