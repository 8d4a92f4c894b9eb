from __future__ import annotations
from flask import Blueprint, request, g
from sqlalchemy import select
from passport_authz import get_db
from passport_authz.decorators.auth import require_permissions
from passport_authz.models.device_passport import DevicePassport
from passport_authz.models.service_request import ServiceRequest
from passport_authz.services.scope import SqlAlchemyScope, apply_data_scope
from passport_authz.utils.listing import apply_pagination, build_list_payload
from passport_authz.utils.validation import parse_product_line, parse_status, validate_choice

passports_bp = Blueprint('passports', __name__)


@passports_bp.get('/passports')
@require_permissions('passport.read')
def list_passports():
    session = get_db()
    stmt = select(DevicePassport)
    status = request.args.get('status')
    if status:
        stmt = stmt.where(DevicePassport.status == parse_status(status).value)
    product_line = request.args.get('product_line')
    if product_line:
        stmt = stmt.where(DevicePassport.product_line == parse_product_line(product_line).value)
    stmt = apply_data_scope(SqlAlchemyScope(stmt), g.user_permissions, 'passport').statement
    rows, total, limit, offset = apply_pagination(session, stmt.order_by(DevicePassport.passport_code.asc()))
    return build_list_payload([_passport_json(p) for p in rows], total, limit, offset)


@passports_bp.get('/requests')
@require_permissions('service-request.read')
def list_requests():
    session = get_db()
    stmt = select(ServiceRequest)
    status = request.args.get('status')
    if status:
        stmt = stmt.where(ServiceRequest.status == validate_choice(status, ServiceRequest.ALL_STATUSES))
    stmt = apply_data_scope(SqlAlchemyScope(stmt), g.user_permissions, 'request').statement
    rows, total, limit, offset = apply_pagination(session, stmt.order_by(ServiceRequest.id.asc()))
    return build_list_payload([_request_json(r) for r in rows], total, limit, offset)


def _passport_json(p: DevicePassport):
    return {
        'id': p.id,
        'passport_code': p.passport_code,
        'product_line': p.product_line,
        'status': p.status,
        'supplier_id': p.supplier_id,
        'customer_id': p.customer_id,
    }


def _request_json(r: ServiceRequest):
    return {
        'id': r.id,
        'organization_id': r.organization_id,
        'product_line': r.product_line,
        'status': r.status,
        'created_by_id': r.created_by_id,
    }
