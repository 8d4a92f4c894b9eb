"""Enum-like definitions shared by the permission catalog, scope filters and workflow.

Values are persisted (users.role, device_passports.status) and travel in JSON,
so never rename a member; add a new one instead.
"""
from __future__ import annotations
from enum import Enum


class UserRole(str, Enum):
    PUBLIC = 'PUBLIC'
    CUSTOMER = 'CUSTOMER'
    # Internal platform roles
    ENGINEER = 'ENGINEER'
    QC_INSPECTOR = 'QC_INSPECTOR'
    OPERATOR = 'OPERATOR'
    ADMIN = 'ADMIN'
    # Supplier organization roles
    SUPPLIER_VIEWER = 'SUPPLIER_VIEWER'
    SUPPLIER_QC = 'SUPPLIER_QC'
    SUPPLIER_PACKER = 'SUPPLIER_PACKER'
    SUPPLIER_SHIPPER = 'SUPPLIER_SHIPPER'
    SUPPLIER_ADMIN = 'SUPPLIER_ADMIN'


# Full visibility, no isolation predicates
PLATFORM_ADMIN_ROLE = UserRole.ADMIN


class DataScope(str, Enum):
    ALL = 'ALL'
    DEPARTMENT = 'DEPARTMENT'
    OWN = 'OWN'


class DeviceStatus(str, Enum):
    CREATED = 'CREATED'
    PROCURED = 'PROCURED'
    IN_QC = 'IN_QC'
    QC_PASSED = 'QC_PASSED'
    QC_FAILED = 'QC_FAILED'
    IN_ASSEMBLY = 'IN_ASSEMBLY'
    IN_TESTING = 'IN_TESTING'
    TEST_PASSED = 'TEST_PASSED'
    TEST_FAILED = 'TEST_FAILED'
    PACKAGED = 'PACKAGED'
    IN_TRANSIT = 'IN_TRANSIT'
    DELIVERED = 'DELIVERED'
    IN_SERVICE = 'IN_SERVICE'
    MAINTENANCE = 'MAINTENANCE'
    RETIRED = 'RETIRED'


class ProductLine(str, Enum):
    PF = 'PF'  # Packaging Filling
    QI = 'QI'  # Quality Inspection
    MP = 'MP'  # Metal Processing
    PP = 'PP'  # Plastics Processing
    HL = 'HL'  # Hospital Lab
    ET = 'ET'  # Education Training
    WL = 'WL'  # Warehouse Logistics
    IP = 'IP'  # Industrial Parts
    CS = 'CS'  # Custom Solutions


__all__ = ['UserRole', 'PLATFORM_ADMIN_ROLE', 'DataScope', 'DeviceStatus', 'ProductLine']
