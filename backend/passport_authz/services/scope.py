"""Query narrowing by organization isolation, ownership, product line and department.

Predicates are appended through a minimal ``add_predicate`` interface so the
same rules drive a SQLAlchemy ``Select`` and plain in-memory inspection.

Passports carry supplier/customer organization keys instead of an
organization column, so supplier-side isolation filters ``supplier_id``.
There is no customer-side branch for passports yet; whether customer
organizations should be isolated by ``customer_id`` is still an open question.
"""
from __future__ import annotations
from typing import Any, Dict, Iterator, List, Mapping, Protocol, Type

from sqlalchemy.sql import Select

from passport_authz.constants.enums import PLATFORM_ADMIN_ROLE, DataScope
from passport_authz.models.device_passport import DevicePassport
from passport_authz.models.service_request import ServiceRequest
from passport_authz.types import COMPARATOR_EQ, COMPARATOR_IN, EffectivePermissions, Predicate

PASSPORT_ALIAS = 'passport'

# Entity alias -> mapped model, for SQLAlchemy targets
ENTITY_ALIASES: Dict[str, Type[Any]] = {
    PASSPORT_ALIAS: DevicePassport,
    'request': ServiceRequest,
}


class ScopeTarget(Protocol):
    def add_predicate(self, predicate: Predicate) -> Any:
        ...


def scope_predicates(perms: EffectivePermissions, alias: str) -> Iterator[Predicate]:
    if perms.role == PLATFORM_ADMIN_ROLE:
        return
    if perms.organization_id:
        if alias != PASSPORT_ALIAS:
            yield Predicate(alias, 'organization_id', COMPARATOR_EQ, perms.organization_id)
        else:
            yield Predicate(alias, 'supplier_id', COMPARATOR_EQ, perms.organization_id)
    if perms.data_scope == DataScope.OWN:
        yield Predicate(alias, 'created_by_id', COMPARATOR_EQ, perms.principal_id)
    # DEPARTMENT and ALL add nothing beyond the isolation predicate
    product_lines = perms.scope_override.product_lines
    if product_lines:
        yield Predicate(alias, 'product_line', COMPARATOR_IN, tuple(product_lines))
    departments = perms.scope_override.departments
    if departments:
        yield Predicate(alias, 'department_id', COMPARATOR_IN, tuple(departments))


def apply_data_scope(query: ScopeTarget, perms: EffectivePermissions, alias: str):
    """Append every scope predicate for ``perms`` to ``query`` and return it."""
    for predicate in scope_predicates(perms, alias):
        query.add_predicate(predicate)
    return query


class PredicateCollector:
    """Records predicates; ``matches`` evaluates them against a plain mapping."""

    def __init__(self):
        self.predicates: List[Predicate] = []

    def add_predicate(self, predicate: Predicate) -> 'PredicateCollector':
        self.predicates.append(predicate)
        return self

    def matches(self, record: Mapping[str, Any]) -> bool:
        for p in self.predicates:
            value = record.get(p.field)
            if p.comparator == COMPARATOR_EQ and value != p.value:
                return False
            if p.comparator == COMPARATOR_IN and value not in p.value:
                return False
        return True

    def __iter__(self):
        return iter(self.predicates)

    def __len__(self) -> int:
        return len(self.predicates)


class SqlAlchemyScope:
    """Wraps a ``Select`` and turns predicates into WHERE clauses on the aliased model."""

    def __init__(self, statement: Select, aliases: Mapping[str, Type[Any]] = ENTITY_ALIASES):
        self.statement = statement
        self.aliases = aliases

    def add_predicate(self, predicate: Predicate) -> 'SqlAlchemyScope':
        model = self.aliases.get(predicate.alias)
        if model is None:
            raise ValueError(f"Unknown entity alias '{predicate.alias}'")
        column = getattr(model, predicate.field, None)
        if column is None:
            raise ValueError(f"{model.__name__} has no column '{predicate.field}'")
        if predicate.comparator == COMPARATOR_EQ:
            self.statement = self.statement.where(column == predicate.value)
        elif predicate.comparator == COMPARATOR_IN:
            self.statement = self.statement.where(column.in_(list(predicate.value)))
        else:
            raise ValueError(f"Unsupported comparator '{predicate.comparator}'")
        return self


__all__ = [
    'PASSPORT_ALIAS', 'ENTITY_ALIASES', 'ScopeTarget', 'scope_predicates', 'apply_data_scope',
    'PredicateCollector', 'SqlAlchemyScope',
]
