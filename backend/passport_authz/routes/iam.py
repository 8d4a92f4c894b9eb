from flask import Blueprint
from flask_jwt_extended import jwt_required
from passport_authz.decorators.auth import current_user_permissions, require_permissions
from passport_authz.extension import get_components
from passport_authz.services.policy import PermissionResolver

iam_bp = Blueprint('iam', __name__)


@iam_bp.get('/me/permissions')
@jwt_required()
def my_permissions():
    # everything below comes from the one snapshot resolved for this request
    perms = current_user_permissions()
    body = perms.to_dict()
    body['can_approve'] = PermissionResolver.approves(perms)
    lines = PermissionResolver.product_lines_of(perms)
    body['allowed_product_lines'] = list(lines) if lines is not None else None
    return body


@iam_bp.get('/roles')
@require_permissions('user.read')
def list_roles():
    return {'data': get_components().catalog.as_dict()}
