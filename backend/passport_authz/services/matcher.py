"""Wildcard permission matching shared by the resolver, the access guard and the workflow engine.

``required`` is granted by a holder set when the set contains ``*``, contains
``required`` verbatim, or contains ``<resource>.*`` where ``resource`` is the
text before the first dot of ``required``. The resource wildcard is not depth
limited: ``device.*`` grants ``device.status.update`` as well.
"""
from __future__ import annotations
import re
from typing import AbstractSet

from passport_authz.constants.permissions import GLOBAL_WILDCARD

_SEGMENT = r'[a-z0-9][a-z0-9_-]*'
_PERMISSION_RE = re.compile(rf'^{_SEGMENT}(\.{_SEGMENT})*\.(\*|{_SEGMENT})$')


def resource_of(required: str) -> str:
    return required.split('.', 1)[0]


def has_permission(holder: AbstractSet[str], required: str) -> bool:
    if GLOBAL_WILDCARD in holder:
        return True
    if required in holder:
        return True
    return f"{resource_of(required)}.*" in holder


def is_valid_permission(code: str) -> bool:
    """True for ``*``, ``resource.*`` and ``resource.action[.detail...]``."""
    if code == GLOBAL_WILDCARD:
        return True
    if not isinstance(code, str) or not _PERMISSION_RE.match(code):
        return False
    # a wildcard is only allowed directly after the resource segment
    return not code.endswith('.*') or code.count('.') == 1


__all__ = ['has_permission', 'is_valid_permission', 'resource_of']
