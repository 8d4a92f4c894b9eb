from __future__ import annotations
from flask import Blueprint, request, abort
from flask_jwt_extended import get_jwt_identity, jwt_required
from passport_authz.decorators.auth import current_user_permissions, require_permissions
from passport_authz.extension import get_components
from passport_authz.types import DeviceFacts
from passport_authz.utils.validation import parse_status

workflow_bp = Blueprint('workflow', __name__)


@workflow_bp.get('/transitions')
@require_permissions('device.read')
def available_transitions():
    current = parse_status(request.args.get('from'), 'from')
    listing = get_components().workflow.get_available_transitions(get_jwt_identity(), current)
    return {'from': current.value, 'data': [t.to_dict() for t in listing]}


@workflow_bp.get('/path')
@require_permissions('device.read')
def workflow_path():
    start = parse_status(request.args.get('start'), 'start')
    end = parse_status(request.args.get('end'), 'end')
    path = get_components().workflow.get_workflow_path(start, end)
    return {'start': start.value, 'end': end.value, 'path': [s.value for s in path]}


@workflow_bp.get('/capabilities')
@jwt_required()
def capabilities():
    perms = current_user_permissions()
    return get_components().workflow.get_role_workflow_capabilities(perms.principal_id)


@workflow_bp.post('/validate')
@require_permissions('device.status.update')
def validate_transition():
    data = request.get_json(silent=True) or {}
    current = parse_status(data.get('from'), 'from')
    target = parse_status(data.get('to'), 'to')
    facts = data.get('facts')
    if facts is not None and not isinstance(facts, dict):
        abort(400, description='facts invalid')
    rule = get_components().workflow.transition(get_jwt_identity(), current, target, DeviceFacts.from_dict(facts))
    return {
        'allowed': True,
        'from': rule.from_state.value,
        'to': rule.to_state.value,
        'required_permission': rule.required_permission,
        'description': rule.description,
    }
