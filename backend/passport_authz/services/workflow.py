"""Device lifecycle workflow: transition validation, listing and path search.

The engine only decides. Applying a validated state change is the persistence
layer's job and must happen in its own transaction.
"""
from __future__ import annotations
import logging
from typing import Dict, List, Optional

from passport_authz.constants.enums import DeviceStatus
from passport_authz.constants.permissions import WORKFLOW_CAPABILITIES
from passport_authz.constants.transitions import CONDITION_REASONS
from passport_authz.errors import MissingPermission, UndefinedTransition, UnmetCondition
from passport_authz.services.policy import PermissionResolver
from passport_authz.types import AvailableTransition, DeviceFacts, TransitionRule, TransitionResult
from passport_authz.utils.fsm import TransitionCatalog

logger = logging.getLogger(__name__)


def _condition_met(name: str, facts: DeviceFacts) -> bool:
    if name == 'require_qc_approval':
        return bool(facts.qc_approved)
    if name == 'require_package_complete':
        return bool(facts.package_complete)
    if name == 'require_tracking_number':
        return bool(facts.tracking_number)
    raise ValueError(f"Unknown transition condition '{name}'")


class WorkflowEngine:
    def __init__(self, transitions: TransitionCatalog, resolver: PermissionResolver):
        self.transitions = transitions
        self.resolver = resolver

    def _evaluate(self, principal_id: Optional[str], current: DeviceStatus, target: DeviceStatus,
                  facts: Optional[DeviceFacts]):
        """Return (result, rule, failed_condition)."""
        rule = self.transitions.rule_for(current, target)
        if rule is None:
            reason = f"No workflow transition defined from {current.value} to {target.value}"
            return TransitionResult(False, reason), None, None
        if not self.resolver.check_permission(principal_id, rule.required_permission):
            reason = f"Missing required permission: {rule.required_permission}"
            return TransitionResult(False, reason, rule.required_permission), rule, None
        if rule.conditions:
            facts = facts or DeviceFacts()
            for name in rule.conditions.declared():
                if not _condition_met(name, facts):
                    return TransitionResult(False, CONDITION_REASONS[name]), rule, name
        return TransitionResult(True), rule, None

    def can_transition(self, principal_id: Optional[str], current: DeviceStatus, target: DeviceStatus,
                       facts: Optional[DeviceFacts] = None) -> TransitionResult:
        result, _, _ = self._evaluate(principal_id, current, target, facts)
        return result

    def transition(self, principal_id: Optional[str], current: DeviceStatus, target: DeviceStatus,
                   facts: Optional[DeviceFacts] = None) -> TransitionRule:
        """Validate a transition or raise; returns the matching rule. Persists nothing."""
        result, rule, condition = self._evaluate(principal_id, current, target, facts)
        if not result.allowed:
            if result.required_permission:
                raise MissingPermission(result.required_permission, result.reason, rule.key)
            if rule is None:
                raise UndefinedTransition(current, target, result.reason)
            raise UnmetCondition(condition, result.reason)
        logger.info('User %s transitioned device from %s to %s', principal_id, current.value, target.value)
        return rule

    def get_available_transitions(self, principal_id: Optional[str], current: DeviceStatus) -> List[AvailableTransition]:
        """Outgoing edges annotated with the caller's permission.

        Informational only: business conditions are not evaluated and the
        listing must never stand in for an enforcement check.
        """
        perms = self.resolver.get_effective_permissions(principal_id)
        out = []
        for rule in self.transitions.rules_from(current):
            allowed = perms is not None and self.resolver.has_permission(perms.permissions, rule.required_permission)
            out.append(AvailableTransition(
                to_state=rule.to_state,
                description=rule.description,
                has_permission=allowed,
                required_permission=rule.required_permission,
            ))
        return out

    def get_workflow_path(self, start: DeviceStatus, end: DeviceStatus) -> List[DeviceStatus]:
        return self.transitions.shortest_path(start, end)

    def get_role_workflow_capabilities(self, principal_id: Optional[str]) -> Dict[str, bool]:
        perms = self.resolver.get_effective_permissions(principal_id)
        return {
            name: perms is not None and self.resolver.has_permission(perms.permissions, code)
            for name, code in WORKFLOW_CAPABILITIES.items()
        }


__all__ = ['WorkflowEngine']
