"""Device lifecycle transition rules: QC -> Package -> Shipping -> Delivery -> Service.

Declaration order matters: it is the order available transitions are listed in
and the order the path search explores edges.
"""
from __future__ import annotations
from typing import List

from passport_authz.constants.enums import DeviceStatus as S
from passport_authz.types import TransitionConditions, TransitionRule

TRANSITION_RULES: List[TransitionRule] = [
    # QC
    TransitionRule(S.IN_QC, S.QC_PASSED, 'qc.approve', 'QC Inspector approves quality check'),
    TransitionRule(S.IN_QC, S.QC_FAILED, 'qc.reject', 'QC Inspector rejects quality check'),
    TransitionRule(S.QC_FAILED, S.IN_QC, 'qc.inspect', 'Re-submit for quality check'),
    # Packaging
    TransitionRule(
        S.QC_PASSED, S.PACKAGED, 'workflow.package-to-ship', 'Packer completes packaging',
        TransitionConditions(require_qc_approval=True),
    ),
    # Shipping
    TransitionRule(
        S.PACKAGED, S.IN_TRANSIT, 'workflow.ship-to-transit', 'Shipper dispatches package',
        TransitionConditions(require_package_complete=True, require_tracking_number=True),
    ),
    TransitionRule(S.IN_TRANSIT, S.DELIVERED, 'shipping.confirm', 'Customer confirms delivery'),
    # Service
    TransitionRule(S.DELIVERED, S.IN_SERVICE, 'device.activate', 'Device put into service'),
    TransitionRule(S.IN_SERVICE, S.MAINTENANCE, 'device.update', 'Device requires maintenance'),
    TransitionRule(S.MAINTENANCE, S.IN_SERVICE, 'device.update', 'Maintenance completed'),
    TransitionRule(S.IN_SERVICE, S.RETIRED, 'device.retire', 'Device retired from service'),
]

# Human readable failure reason per precondition
CONDITION_REASONS = {
    'require_qc_approval': 'QC approval is required before packaging',
    'require_package_complete': 'Packaging must be completed before shipping',
    'require_tracking_number': 'Tracking number is required for shipping',
}

__all__ = ['TRANSITION_RULES', 'CONDITION_REASONS']
