"""Process-wide, read-only role catalog.

Built once by the app factory and handed to the resolver explicitly; nothing
mutates it afterwards, so request workers share it without locking.
"""
from __future__ import annotations
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional

from passport_authz.constants.enums import DataScope, UserRole
from passport_authz.constants.permissions import ROLE_DATA_SCOPE, ROLE_PERMISSIONS
from passport_authz.services.matcher import is_valid_permission


class PermissionCatalog:
    def __init__(self, role_permissions: Mapping[UserRole, Iterable[str]], role_data_scope: Mapping[UserRole, DataScope]):
        self._permissions: Mapping[UserRole, FrozenSet[str]] = MappingProxyType(
            {UserRole(role): frozenset(codes) for role, codes in role_permissions.items()}
        )
        self._scopes: Mapping[UserRole, DataScope] = MappingProxyType(
            {UserRole(role): DataScope(scope) for role, scope in role_data_scope.items()}
        )

    def permissions_for(self, role: UserRole) -> FrozenSet[str]:
        return self._permissions.get(role, frozenset())

    def default_scope(self, role: UserRole) -> DataScope:
        # Unknown roles fall back to the narrowest scope
        return self._scopes.get(role, DataScope.OWN)

    def roles(self) -> List[UserRole]:
        return list(self._permissions.keys())

    def as_dict(self) -> Dict[str, Dict[str, object]]:
        return {
            role.value: {
                'permissions': sorted(self.permissions_for(role)),
                'data_scope': self.default_scope(role).value,
            }
            for role in self.roles()
        }

    def validate(self) -> List[str]:
        """Return a list of problems; empty when the catalog is consistent."""
        problems = []
        for role in UserRole:
            if role not in self._permissions:
                problems.append(f"Role '{role.value}' has no permission entry")
            if role not in self._scopes:
                problems.append(f"Role '{role.value}' has no default data scope")
        for role, codes in self._permissions.items():
            for code in sorted(codes):
                if not is_valid_permission(code):
                    problems.append(f"Role '{role.value}' has malformed permission: {code}")
        return problems


def build_permission_catalog(role_permissions: Optional[Mapping[UserRole, Iterable[str]]] = None,
                             role_data_scope: Optional[Mapping[UserRole, DataScope]] = None) -> PermissionCatalog:
    return PermissionCatalog(
        role_permissions if role_permissions is not None else ROLE_PERMISSIONS,
        role_data_scope if role_data_scope is not None else ROLE_DATA_SCOPE,
    )


__all__ = ['PermissionCatalog', 'build_permission_catalog']
