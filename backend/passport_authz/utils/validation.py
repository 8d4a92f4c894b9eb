"""Parsing helpers for lifecycle states and filter values arriving in query strings and JSON bodies.

Unknown values abort with 400 so they never reach the workflow engine or a query.
"""
from __future__ import annotations
from typing import Iterable
from flask import abort
from passport_authz.constants.enums import DeviceStatus, ProductLine


def parse_status(raw, field_name: str = 'status') -> DeviceStatus:
    if raw is None or raw == '':
        abort(400, description=f"{field_name} required")
    try:
        return DeviceStatus(raw)
    except ValueError:
        abort(400, description=f"{field_name} invalid")


def validate_choice(raw: str, allowed: Iterable[str], field_name: str = 'status') -> str:
    """Return ``raw`` when it is one of ``allowed``, otherwise abort with 400."""
    if raw not in allowed:
        abort(400, description=f"{field_name} invalid")
    return raw


def parse_product_line(raw: str, field_name: str = 'product_line') -> ProductLine:
    return ProductLine(validate_choice(raw, [p.value for p in ProductLine], field_name))


__all__ = ['parse_status', 'validate_choice', 'parse_product_line']
