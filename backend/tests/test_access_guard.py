import pytest
from passport_authz.constants.enums import UserRole
from passport_authz.errors import Forbidden, MissingPermission, PermissionsNotFound, Unauthenticated
from passport_authz.services.guard import AccessGuard
from tests.test_utils_seed import make_resolver, principal


@pytest.fixture()
def guard():
    return AccessGuard(make_resolver(
        principal('cust', UserRole.CUSTOMER, 'ORG2'),
        principal('op', UserRole.OPERATOR, 'ORG1'),
        principal('off', UserRole.ADMIN, is_active=False),
    ))


def test_public_operation_is_allowed_without_principal(guard):
    assert guard.authorize([], None) is None
    assert guard.authorize((), 'cust') is None


def test_missing_principal_is_unauthenticated(guard):
    with pytest.raises(Unauthenticated):
        guard.authorize(['scan.read'], None)
    with pytest.raises(Unauthenticated):
        guard.authorize(['scan.read'], '')


def test_unknown_or_inactive_principal_is_forbidden(guard):
    for pid in ('ghost', 'off'):
        with pytest.raises(PermissionsNotFound) as exc:
            guard.authorize(['scan.read'], pid)
        assert isinstance(exc.value, Forbidden)
        assert exc.value.detail == 'User permissions not found'


def test_first_missing_permission_fails_the_check(guard):
    with pytest.raises(MissingPermission) as exc:
        guard.authorize(['device.read', 'qc.approve', 'user.delete'], 'cust')
    assert exc.value.permission == 'qc.approve'
    assert str(exc.value) == 'Missing required permission: qc.approve'


def test_success_exposes_effective_permissions(guard):
    perms = guard.authorize(['device.create', 'passport.read', 'device.status.update'], 'op')
    assert perms.principal_id == 'op'
    assert perms.role == UserRole.OPERATOR
    assert perms.organization_id == 'ORG1'
