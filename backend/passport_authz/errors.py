"""Authorization and workflow failures.

``status_code`` is only a hint for the HTTP layer; nothing in the services
depends on it.
"""
from __future__ import annotations
from typing import Optional, Tuple

from passport_authz.constants.enums import DeviceStatus


class AuthorizationError(Exception):
    status_code = 500
    title = 'Authorization Error'

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class Unauthenticated(AuthorizationError):
    status_code = 401
    title = 'Unauthorized'

    def __init__(self, detail: str = 'User not authenticated'):
        super().__init__(detail)


class Forbidden(AuthorizationError):
    status_code = 403
    title = 'Forbidden'


class PermissionsNotFound(Forbidden):
    def __init__(self, detail: str = 'User permissions not found'):
        super().__init__(detail)


class MissingPermission(Forbidden):
    """``transition`` is the (from_state, to_state) pair when raised by the workflow engine."""

    def __init__(self, permission: str, detail: Optional[str] = None,
                 transition: Optional[Tuple[DeviceStatus, DeviceStatus]] = None):
        super().__init__(detail or f"Missing required permission: {permission}")
        self.permission = permission
        self.transition = transition


class InvalidOperation(AuthorizationError):
    status_code = 400
    title = 'Bad Request'


class UndefinedTransition(InvalidOperation):
    def __init__(self, from_state: DeviceStatus, to_state: DeviceStatus, detail: Optional[str] = None):
        super().__init__(detail or f"No workflow transition defined from {from_state.value} to {to_state.value}")
        self.from_state = from_state
        self.to_state = to_state


class UnmetCondition(InvalidOperation):
    def __init__(self, condition: str, detail: str):
        super().__init__(detail)
        self.condition = condition


__all__ = [
    'AuthorizationError', 'Unauthenticated', 'Forbidden', 'PermissionsNotFound', 'MissingPermission',
    'InvalidOperation', 'UndefinedTransition', 'UnmetCondition',
]
