import pytest
from passport_authz.services.matcher import has_permission, is_valid_permission


def test_global_wildcard_grants_anything():
    assert has_permission({'*'}, 'device.read')
    assert has_permission({'*'}, 'workflow.package-to-ship')
    assert has_permission({'*'}, 'anything')


def test_exact_match():
    assert has_permission({'qc.approve'}, 'qc.approve')
    assert not has_permission({'qc.approve'}, 'qc.reject')


def test_resource_wildcard_is_not_depth_limited():
    holder = {'device.*'}
    assert has_permission(holder, 'device.read')
    assert has_permission(holder, 'device.status.update')
    assert has_permission(holder, 'device.a.b.c')


def test_resource_wildcard_uses_first_segment_only():
    holder = {'device.*'}
    assert not has_permission(holder, 'devices.read')
    assert not has_permission(holder, 'passport.read')
    # a deeper wildcard is never consulted
    assert not has_permission({'device.status.*'}, 'device.status.update')


def test_empty_holder_grants_nothing():
    assert not has_permission(set(), 'scan.read')
    assert not has_permission(frozenset(), '*')


@pytest.mark.parametrize('code', ['*', 'scan.read', 'device.*', 'device.status.update', 'service-request.create',
                                  'workflow.package-to-ship'])
def test_valid_permission_codes(code):
    assert is_valid_permission(code)


@pytest.mark.parametrize('code', ['', 'device', 'device.', '.read', 'Device.Read', 'device.status.*', '*.read', 'a..b'])
def test_invalid_permission_codes(code):
    assert not is_valid_permission(code)
