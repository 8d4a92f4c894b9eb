"""Principal lookup: the only read this subsystem performs against persistence."""
from __future__ import annotations
from typing import Callable, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from passport_authz.constants.enums import UserRole
from passport_authz.models.authz import User
from passport_authz.types import Principal, ScopeOverride


class PrincipalRepository(Protocol):
    def get_principal(self, principal_id: str) -> Optional[Principal]:
        """Return the principal, or None when it is absent or inactive."""
        ...


def principal_from_user(user: User) -> Principal:
    return Principal(
        id=user.id,
        role=UserRole(user.role),
        organization_id=user.organization_id,
        is_active=bool(user.is_active),
        scope_override=ScopeOverride.from_dict(user.scope_config),
    )


class SqlAlchemyPrincipalRepository:
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def get_principal(self, principal_id: str) -> Optional[Principal]:
        session = self._session_factory()
        # populate_existing refreshes a User already held in the identity map
        user = session.execute(
            select(User)
            .where(User.id == str(principal_id), User.is_active.is_(True))
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()
        if user is None:
            return None
        return principal_from_user(user)


__all__ = ['PrincipalRepository', 'SqlAlchemyPrincipalRepository', 'principal_from_user']
