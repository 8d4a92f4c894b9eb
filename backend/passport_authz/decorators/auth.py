from functools import wraps
from typing import Optional
from flask import g
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request
from passport_authz.errors import PermissionsNotFound
from passport_authz.extension import get_components
from passport_authz.types import EffectivePermissions


def require_permissions(*codes: str):
    """Run the access guard for ``codes`` (all required, checked in order).

    The bearer token is verified by flask-jwt-extended; its identity is the
    principal id. No codes means a public endpoint. The resolved
    EffectivePermissions are stored on ``g.user_permissions``.
    """
    def outer(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            principal_id = None
            if codes:
                verify_jwt_in_request(optional=True)
                principal_id = get_jwt_identity()
            g.user_permissions = get_components().guard.authorize(codes, principal_id)
            return fn(*args, **kwargs)
        return wrapper
    return outer


def current_user_permissions() -> Optional[EffectivePermissions]:
    perms = g.get('user_permissions')
    if perms is None:
        # Endpoints guarded only by jwt_required resolve lazily
        perms = get_components().resolver.get_effective_permissions(get_jwt_identity())
        if perms is None:
            raise PermissionsNotFound()
        g.user_permissions = perms
    return perms
