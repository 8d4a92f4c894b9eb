"""Role -> permission table and default data scopes.

Permission codes are ``resource.action[.detail...]``, ``resource.*`` or ``*``.
Extend cautiously; never rename codes silently, existing route declarations and
transition rules reference them verbatim.
"""
from __future__ import annotations
from typing import Dict, List

from passport_authz.constants.enums import DataScope, UserRole

GLOBAL_WILDCARD = '*'

ROLE_PERMISSIONS: Dict[UserRole, List[str]] = {
    UserRole.PUBLIC: ['scan.read'],
    UserRole.CUSTOMER: [
        'scan.read',
        'device.read',
        'service-request.create',
        'service-request.read',
    ],
    UserRole.ENGINEER: [
        'scan.read',
        'device.read',
        'device.update',
        'service-order.read',
        'service-order.update',
        'service-record.create',
    ],
    UserRole.QC_INSPECTOR: [
        'scan.read',
        'device.read',
        'device.update',
        'qc.read',
        'qc.approve',
        'device.status.update',
    ],
    UserRole.OPERATOR: [
        'scan.read',
        'device.*',
        'passport.*',
        'service-order.read',
        'service-order.update',
        'user.read',
    ],
    UserRole.ADMIN: [GLOBAL_WILDCARD],
    # Supplier roles only ever see their own organization's data
    UserRole.SUPPLIER_VIEWER: [
        'scan.read',
        'device.read',
        'passport.read',
    ],
    UserRole.SUPPLIER_QC: [
        'scan.read',
        'device.read',
        'device.update',
        'qc.read',
        'qc.create',
        'qc.approve',
        'device.status.update',
    ],
    UserRole.SUPPLIER_PACKER: [
        'scan.read',
        'device.read',
        'device.update',
        'package.read',
        'package.create',
        'package.approve',
        'device.status.update',
    ],
    UserRole.SUPPLIER_SHIPPER: [
        'scan.read',
        'device.read',
        'device.update',
        'shipping.read',
        'shipping.create',
        'shipping.update',
        'device.status.update',
    ],
    UserRole.SUPPLIER_ADMIN: [
        'scan.read',
        'device.*',
        'passport.*',
        'qc.*',
        'package.*',
        'shipping.*',
        'user.read',
        'user.create',
        'user.update',
    ],
}

ROLE_DATA_SCOPE: Dict[UserRole, DataScope] = {
    UserRole.PUBLIC: DataScope.OWN,
    UserRole.CUSTOMER: DataScope.OWN,
    UserRole.ENGINEER: DataScope.ALL,
    UserRole.QC_INSPECTOR: DataScope.ALL,
    UserRole.OPERATOR: DataScope.ALL,
    UserRole.ADMIN: DataScope.ALL,
    UserRole.SUPPLIER_VIEWER: DataScope.ALL,
    UserRole.SUPPLIER_QC: DataScope.ALL,
    UserRole.SUPPLIER_PACKER: DataScope.ALL,
    UserRole.SUPPLIER_SHIPPER: DataScope.ALL,
    UserRole.SUPPLIER_ADMIN: DataScope.ALL,
}

# Holding any one of these makes a principal an approver (unless overridden)
APPROVAL_PERMISSIONS = ('qc.approve', 'package.approve', 'shipping.approve')

# Capability name -> permission checked by get_role_workflow_capabilities
WORKFLOW_CAPABILITIES = {
    'can_approve_qc': 'qc.approve',
    'can_package': 'workflow.package-to-ship',
    'can_ship': 'workflow.ship-to-transit',
    'can_deliver': 'shipping.confirm',
}

__all__ = ['GLOBAL_WILDCARD', 'ROLE_PERMISSIONS', 'ROLE_DATA_SCOPE', 'APPROVAL_PERMISSIONS', 'WORKFLOW_CAPABILITIES']
