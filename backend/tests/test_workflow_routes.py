from passport_authz.constants.enums import UserRole
from tests.test_utils_seed import auth_headers, ensure_organization, ensure_user


def _headers(app, role, **kw):
    with app.app_context():
        user = ensure_user(role, ensure_organization(), **kw)
    return auth_headers(app, user.id)


def test_transitions_require_authentication(client):
    resp = client.get('/workflow/transitions?from=IN_QC')
    assert resp.status_code == 401
    body = resp.get_json()
    assert body['error']['status'] == 401
    assert body['error']['detail'] == 'User not authenticated'


def test_transitions_forbidden_without_device_read(client, app_instance):
    resp = client.get('/workflow/transitions?from=IN_QC', headers=_headers(app_instance, UserRole.PUBLIC))
    assert resp.status_code == 403
    assert resp.get_json()['error']['detail'] == 'Missing required permission: device.read'


def test_transitions_listing(client, app_instance):
    resp = client.get('/workflow/transitions?from=IN_QC', headers=_headers(app_instance, UserRole.QC_INSPECTOR))
    assert resp.status_code == 200, resp.get_json()
    body = resp.get_json()
    assert body['from'] == 'IN_QC'
    assert body['data'] == [
        {'to_state': 'QC_PASSED', 'description': 'QC Inspector approves quality check',
         'has_permission': True, 'required_permission': 'qc.approve'},
        {'to_state': 'QC_FAILED', 'description': 'QC Inspector rejects quality check',
         'has_permission': False, 'required_permission': 'qc.reject'},
    ]


def test_unknown_state_is_bad_request(client, app_instance):
    headers = _headers(app_instance, UserRole.QC_INSPECTOR)
    assert client.get('/workflow/transitions?from=BROKEN', headers=headers).status_code == 400
    assert client.get('/workflow/transitions', headers=headers).status_code == 400


def test_workflow_path_endpoint(client, app_instance):
    headers = _headers(app_instance, UserRole.ENGINEER)
    resp = client.get('/workflow/path?start=IN_TRANSIT&end=RETIRED', headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()['path'] == ['IN_TRANSIT', 'DELIVERED', 'IN_SERVICE', 'RETIRED']
    back = client.get('/workflow/path?start=RETIRED&end=IN_TRANSIT', headers=headers)
    assert back.get_json()['path'] == []


def test_validate_transition_outcomes(client, app_instance):
    admin = _headers(app_instance, UserRole.ADMIN)
    ok = client.post('/workflow/validate', json={'from': 'QC_PASSED', 'to': 'PACKAGED', 'facts': {'qcApproved': True}},
                     headers=admin)
    assert ok.status_code == 200, ok.get_json()
    assert ok.get_json()['allowed'] is True
    assert ok.get_json()['required_permission'] == 'workflow.package-to-ship'

    unmet = client.post('/workflow/validate', json={'from': 'QC_PASSED', 'to': 'PACKAGED'}, headers=admin)
    assert unmet.status_code == 400
    assert unmet.get_json()['error']['detail'] == 'QC approval is required before packaging'

    undefined = client.post('/workflow/validate', json={'from': 'IN_QC', 'to': 'RETIRED'}, headers=admin)
    assert undefined.status_code == 400
    assert undefined.get_json()['error']['detail'] == 'No workflow transition defined from IN_QC to RETIRED'


def test_validate_transition_missing_workflow_permission(client, app_instance):
    # packer passes the endpoint guard (device.status.update) but lacks the rule's permission
    packer = _headers(app_instance, UserRole.SUPPLIER_PACKER)
    resp = client.post('/workflow/validate', json={'from': 'QC_PASSED', 'to': 'PACKAGED', 'facts': {'qcApproved': True}},
                       headers=packer)
    assert resp.status_code == 403
    assert resp.get_json()['error']['detail'] == 'Missing required permission: workflow.package-to-ship'


def test_validate_transition_rejects_bad_facts(client, app_instance):
    admin = _headers(app_instance, UserRole.ADMIN)
    resp = client.post('/workflow/validate', json={'from': 'QC_PASSED', 'to': 'PACKAGED', 'facts': ['x']}, headers=admin)
    assert resp.status_code == 400


def test_capabilities_endpoint(client, app_instance):
    resp = client.get('/workflow/capabilities', headers=_headers(app_instance, UserRole.SUPPLIER_QC))
    assert resp.status_code == 200
    assert resp.get_json() == {'can_approve_qc': True, 'can_package': False, 'can_ship': False, 'can_deliver': False}
