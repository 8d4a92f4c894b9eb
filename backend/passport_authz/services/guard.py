"""Request-level permission enforcement.

Authentication happens upstream; the guard receives an already verified
principal id (or None) and the operation's declared permission list.
"""
from __future__ import annotations
import logging
from typing import Optional, Sequence

from passport_authz.errors import MissingPermission, PermissionsNotFound, Unauthenticated
from passport_authz.services.matcher import has_permission
from passport_authz.services.policy import PermissionResolver
from passport_authz.types import EffectivePermissions

logger = logging.getLogger(__name__)


class AccessGuard:
    def __init__(self, resolver: PermissionResolver):
        self.resolver = resolver

    def authorize(self, required: Sequence[str], principal_id: Optional[str]) -> Optional[EffectivePermissions]:
        """Return the caller's EffectivePermissions, or None for a public operation.

        Raises Unauthenticated, PermissionsNotFound or MissingPermission (for the
        first unmatched code in declaration order).
        """
        if not required:
            return None
        if not principal_id:
            raise Unauthenticated()
        perms = self.resolver.get_effective_permissions(principal_id)
        if perms is None:
            logger.warning('Denied principal %s: permissions not found', principal_id)
            raise PermissionsNotFound()
        for code in required:
            if not has_permission(perms.permissions, code):
                logger.warning('Denied principal %s: missing %s', principal_id, code)
                raise MissingPermission(code)
        return perms


__all__ = ['AccessGuard']
