"""Value types exchanged between the resolver, scope filters, guard and workflow engine.

All of them are frozen: a decision is computed from a snapshot of the principal
record and nothing downstream may alter that snapshot.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Tuple

from passport_authz.constants.enums import DataScope, DeviceStatus, ProductLine, UserRole


def _unique(values: Optional[Iterable[Any]]) -> Optional[Tuple[str, ...]]:
    if values is None:
        return None
    seen = []
    for v in values:
        v = v.value if isinstance(v, Enum) else str(v)
        if v not in seen:
            seen.append(v)
    return tuple(seen)


def _product_lines(values: Optional[Iterable[Any]]) -> Optional[Tuple[str, ...]]:
    lines = _unique(values)
    if lines is not None:
        for line in lines:
            ProductLine(line)  # ValueError on an unknown product line code
    return lines


@dataclass(frozen=True)
class ScopeOverride:
    """Per-principal restriction layered over the role defaults.

    A field left as None means "unrestricted"; an empty product line or
    department list is treated the same way.
    """
    data_scope: Optional[DataScope] = None
    product_lines: Optional[Tuple[str, ...]] = None
    departments: Optional[Tuple[str, ...]] = None
    can_approve: Optional[bool] = None

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]]) -> Optional['ScopeOverride']:
        """Build from the persisted ``scope_config`` JSON (camelCase keys)."""
        if raw is None:
            return None
        scope = raw.get('dataScope')
        can_approve = raw.get('canApprove')
        return cls(
            data_scope=DataScope(scope) if scope is not None else None,
            product_lines=_product_lines(raw.get('productLines')),
            departments=_unique(raw.get('departments')),
            can_approve=bool(can_approve) if can_approve is not None else None,
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.data_scope is not None:
            out['dataScope'] = self.data_scope.value
        if self.product_lines is not None:
            out['productLines'] = list(self.product_lines)
        if self.departments is not None:
            out['departments'] = list(self.departments)
        if self.can_approve is not None:
            out['canApprove'] = self.can_approve
        return out


@dataclass(frozen=True)
class Principal:
    id: str
    role: UserRole
    organization_id: Optional[str] = None
    is_active: bool = True
    scope_override: Optional[ScopeOverride] = None


@dataclass(frozen=True)
class EffectivePermissions:
    principal_id: str
    role: UserRole
    organization_id: Optional[str]
    data_scope: DataScope
    scope_override: ScopeOverride
    permissions: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def user_id(self) -> str:
        return self.principal_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            'user_id': self.principal_id,
            'role': self.role.value,
            'organization_id': self.organization_id,
            'data_scope': self.data_scope.value,
            'scope_config': self.scope_override.to_dict(),
            'permissions': sorted(self.permissions),
        }


@dataclass(frozen=True)
class TransitionConditions:
    require_qc_approval: bool = False
    require_package_complete: bool = False
    require_tracking_number: bool = False

    # Evaluation order is fixed
    ORDER = ('require_qc_approval', 'require_package_complete', 'require_tracking_number')

    def declared(self) -> Iterator[str]:
        for name in self.ORDER:
            if getattr(self, name):
                yield name

    def to_dict(self) -> Dict[str, bool]:
        return {name: True for name in self.declared()}


@dataclass(frozen=True)
class TransitionRule:
    from_state: DeviceStatus
    to_state: DeviceStatus
    required_permission: str
    description: str
    conditions: Optional[TransitionConditions] = None

    @property
    def key(self) -> Tuple[DeviceStatus, DeviceStatus]:
        return (self.from_state, self.to_state)


@dataclass(frozen=True)
class DeviceFacts:
    """Lifecycle facts supplied by the business layer for one transition request."""
    qc_approved: bool = False
    package_complete: bool = False
    tracking_number: Optional[str] = None

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]]) -> 'DeviceFacts':
        raw = raw or {}

        def pick(snake: str, camel: str):
            return raw.get(snake, raw.get(camel))

        tracking = pick('tracking_number', 'trackingNumber')
        return cls(
            qc_approved=bool(pick('qc_approved', 'qcApproved')),
            package_complete=bool(pick('package_complete', 'packageComplete')),
            tracking_number=str(tracking) if tracking is not None else None,
        )


@dataclass(frozen=True)
class TransitionResult:
    allowed: bool
    reason: Optional[str] = None
    required_permission: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {'allowed': self.allowed}
        if self.reason is not None:
            out['reason'] = self.reason
        if self.required_permission is not None:
            out['required_permission'] = self.required_permission
        return out


@dataclass(frozen=True)
class AvailableTransition:
    to_state: DeviceStatus
    description: str
    has_permission: bool
    required_permission: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'to_state': self.to_state.value,
            'description': self.description,
            'has_permission': self.has_permission,
            'required_permission': self.required_permission,
        }


COMPARATOR_EQ = '=='
COMPARATOR_IN = 'in'


@dataclass(frozen=True)
class Predicate:
    """One scope restriction: ``<alias>.<field> <comparator> <value>``."""
    alias: str
    field: str
    comparator: str
    value: Any

    def __str__(self) -> str:
        return f"{self.alias}.{self.field} {self.comparator} {self.value!r}"


def with_data_scope(override: Optional[ScopeOverride], scope: DataScope) -> ScopeOverride:
    return replace(override or ScopeOverride(), data_scope=scope)


__all__ = [
    'ScopeOverride', 'Principal', 'EffectivePermissions', 'TransitionConditions', 'TransitionRule',
    'DeviceFacts', 'TransitionResult', 'AvailableTransition', 'Predicate', 'COMPARATOR_EQ',
    'COMPARATOR_IN', 'with_data_scope',
]
