"""Wiring of the authorization components for one application instance."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable

from flask import current_app
from sqlalchemy.orm import Session

from passport_authz.services.catalog import PermissionCatalog, build_permission_catalog
from passport_authz.services.guard import AccessGuard
from passport_authz.services.policy import PermissionResolver
from passport_authz.services.principals import SqlAlchemyPrincipalRepository
from passport_authz.services.workflow import WorkflowEngine
from passport_authz.utils.fsm import TransitionCatalog, build_transition_catalog

EXTENSION_KEY = 'passport_authz'


@dataclass(frozen=True)
class AuthzComponents:
    catalog: PermissionCatalog
    transitions: TransitionCatalog
    resolver: PermissionResolver
    guard: AccessGuard
    workflow: WorkflowEngine


def build_components(session_factory: Callable[[], Session]) -> AuthzComponents:
    catalog = build_permission_catalog()
    problems = catalog.validate()
    if problems:
        raise RuntimeError('Invalid permission catalog: ' + '; '.join(problems))
    transitions = build_transition_catalog()
    resolver = PermissionResolver(SqlAlchemyPrincipalRepository(session_factory), catalog)
    return AuthzComponents(
        catalog=catalog,
        transitions=transitions,
        resolver=resolver,
        guard=AccessGuard(resolver),
        workflow=WorkflowEngine(transitions, resolver),
    )


def get_components() -> AuthzComponents:
    return current_app.extensions[EXTENSION_KEY]
