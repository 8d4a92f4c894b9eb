#!/usr/bin/env python
"""Idempotent seed script for demo organizations and one user per role.

Usage:
    python backend/scripts/seed_authz.py               # seed normally
    python backend/scripts/seed_authz.py --show-roles  # print role -> permission summary (after ensuring seed)
    python backend/scripts/seed_authz.py --dry-run     # run logic then rollback (no DB changes)
    python backend/scripts/seed_authz.py --validate    # validate role & transition catalogs, exit 2 on problems
"""
from __future__ import annotations
import os, sys, argparse, textwrap
from sqlalchemy import select, text

# Allow running from repo root
sys.path.append(os.path.abspath('backend'))

from passport_authz import create_app, get_db  # type: ignore
from passport_authz.constants.enums import UserRole
from passport_authz.extension import get_components
from passport_authz.models.authz import Base, Organization, User
from passport_authz.services.matcher import is_valid_permission

DEMO_ORGANIZATIONS = [
    # (code, name, type)
    ('LUN', 'Luna Medical', Organization.TYPE_INTERNAL),
    ('SIE', 'Siemens Supplier', Organization.TYPE_SUPPLIER),
    ('ACM', 'Acme Hospital', Organization.TYPE_CUSTOMER),
]

SUPPLIER_ROLES = {
    UserRole.SUPPLIER_VIEWER, UserRole.SUPPLIER_QC, UserRole.SUPPLIER_PACKER,
    UserRole.SUPPLIER_SHIPPER, UserRole.SUPPLIER_ADMIN,
}

# Demo overrides: the supplier QC only inspects Packaging Filling devices
DEMO_SCOPE_CONFIG = {
    UserRole.SUPPLIER_QC: {'productLines': ['PF']},
    UserRole.SUPPLIER_VIEWER: {'canApprove': False},
}


def ensure_schema(session):
    try:
        session.execute(text('SELECT 1 FROM users LIMIT 1'))
    except Exception:
        # Auto-create schema for bootstrap; in real env prefer alembic upgrade
        session.rollback()
        import passport_authz.models.device_passport  # noqa: F401
        import passport_authz.models.service_request  # noqa: F401
        Base.metadata.create_all(session.get_bind())


def ensure_organizations(session):
    existing = {o.code: o for o in session.execute(select(Organization)).scalars().all()}
    created = 0
    for code, name, org_type in DEMO_ORGANIZATIONS:
        if code not in existing:
            org = Organization(name=name, code=code, type=org_type)
            session.add(org)
            existing[code] = org
            created += 1
    session.flush()
    return existing, created


def _org_for_role(role: UserRole, orgs):
    if role == UserRole.ADMIN or role == UserRole.PUBLIC:
        return None
    if role in SUPPLIER_ROLES:
        return orgs['SIE']
    if role == UserRole.CUSTOMER:
        return orgs['ACM']
    return orgs['LUN']


def ensure_users(session, orgs):
    domain = os.getenv('SEED_EMAIL_DOMAIN', 'example.com')
    existing = {u.email for u in session.execute(select(User)).scalars().all()}
    created = 0
    for role in UserRole:
        email = f"{role.value.lower().replace('_', '.')}@{domain}"
        if email in existing:
            continue
        org = _org_for_role(role, orgs)
        session.add(User(
            name=role.value.replace('_', ' ').title(),
            email=email,
            role=role.value,
            organization_id=org.id if org else None,
            scope_config=DEMO_SCOPE_CONFIG.get(role),
        ))
        created += 1
    return created


def print_role_summary(catalog):
    rows = [(name, entry['data_scope'], entry['permissions']) for name, entry in catalog.as_dict().items()]
    name_w = max(len(r[0]) for r in rows)
    print(f"{'Role'.ljust(name_w)} | Scope | Permissions")
    print('-' * (name_w + 60))
    for name, scope, perms in rows:
        print(f"{name.ljust(name_w)} | {scope.ljust(5)} | {', '.join(perms)}")


def validate_catalogs(components):
    problems = list(components.catalog.validate())
    for rule in components.transitions.rules():
        if not is_valid_permission(rule.required_permission):
            problems.append(
                f"Transition {rule.from_state.value} -> {rule.to_state.value} has malformed permission: {rule.required_permission}"
            )
    return problems


def parse_args():
    p = argparse.ArgumentParser(
        description="Seed demo organizations & users for the device passport RBAC",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""Examples:\n  seed normally: seed_authz.py\n  dry run: seed_authz.py --dry-run\n  show roles: seed_authz.py --show-roles\n""")
    )
    p.add_argument('--show-roles', action='store_true', help='Print the role catalog after seeding')
    p.add_argument('--dry-run', action='store_true', help='Rollback after operations (no commit)')
    p.add_argument('--validate', action='store_true', help='Validate role and transition catalogs; exit 2 on problems')
    return p.parse_args()


def main():
    args = parse_args()
    app = create_app()
    with app.app_context():
        components = get_components()
        if args.validate:
            problems = validate_catalogs(components)
            if problems:
                print('\n[VALIDATION] FAIL:')
                for prob in problems:
                    print(' -', prob)
                sys.exit(2)
            print('[VALIDATION] OK: role and transition catalogs are consistent.')
        session = get_db()
        ensure_schema(session)
        orgs, created_o = ensure_organizations(session)
        created_u = ensure_users(session, orgs)
        if args.dry_run:
            session.rollback()
            print(f"[DRY-RUN] (rolled back) Organizations would create: {created_o}, Users would create: {created_u}")
        else:
            session.commit()
            print(f"[DONE] Organizations created: {created_o}, Users created: {created_u}")
        if args.show_roles:
            print_role_summary(components.catalog)


if __name__ == '__main__':
    main()
