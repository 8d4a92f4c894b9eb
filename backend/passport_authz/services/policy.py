"""Effective permission resolution.

Every call reads the principal afresh through the repository; results are
never cached across requests so a role change or deactivation applies to the
very next decision.
"""
from __future__ import annotations
import logging
from typing import AbstractSet, Optional, Tuple

from passport_authz.constants.permissions import APPROVAL_PERMISSIONS
from passport_authz.services.catalog import PermissionCatalog
from passport_authz.services.matcher import has_permission
from passport_authz.services.principals import PrincipalRepository
from passport_authz.types import EffectivePermissions, with_data_scope

logger = logging.getLogger(__name__)


class PermissionResolver:
    def __init__(self, principals: PrincipalRepository, catalog: PermissionCatalog):
        self.principals = principals
        self.catalog = catalog

    def get_effective_permissions(self, principal_id: Optional[str]) -> Optional[EffectivePermissions]:
        """Merge catalog defaults with the principal's scope override.

        Returns None when the principal does not exist or is inactive; callers
        must not distinguish the two.
        """
        if principal_id is None:
            return None
        principal = self.principals.get_principal(str(principal_id))
        if principal is None or not principal.is_active:
            logger.debug('No active principal %s', principal_id)
            return None
        override = principal.scope_override
        data_scope = override.data_scope if override and override.data_scope else self.catalog.default_scope(principal.role)
        return EffectivePermissions(
            principal_id=principal.id,
            role=principal.role,
            organization_id=principal.organization_id,
            data_scope=data_scope,
            scope_override=with_data_scope(override, data_scope),
            permissions=self.catalog.permissions_for(principal.role),
        )

    @staticmethod
    def has_permission(permissions: AbstractSet[str], required: str) -> bool:
        return has_permission(permissions, required)

    def check_permission(self, principal_id: Optional[str], required: str) -> bool:
        perms = self.get_effective_permissions(principal_id)
        if perms is None:
            return False
        return has_permission(perms.permissions, required)

    def can_approve(self, principal_id: Optional[str]) -> bool:
        return self.approves(self.get_effective_permissions(principal_id))

    def get_allowed_product_lines(self, principal_id: Optional[str]) -> Optional[Tuple[str, ...]]:
        """Product lines the principal is restricted to, or None for no restriction."""
        return self.product_lines_of(self.get_effective_permissions(principal_id))

    @staticmethod
    def approves(perms: Optional[EffectivePermissions]) -> bool:
        if perms is None:
            return False
        # Only an explicit False vetoes; None means "not restricted"
        if perms.scope_override.can_approve is False:
            return False
        return any(has_permission(perms.permissions, code) for code in APPROVAL_PERMISSIONS)

    @staticmethod
    def product_lines_of(perms: Optional[EffectivePermissions]) -> Optional[Tuple[str, ...]]:
        if perms is None:
            return None
        lines = perms.scope_override.product_lines
        return lines if lines else None


__all__ = ['PermissionResolver']
