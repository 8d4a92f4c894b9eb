import logging
import pytest
from passport_authz.constants.enums import DataScope, DeviceStatus as S, UserRole
from passport_authz.errors import Forbidden, InvalidOperation, MissingPermission, UndefinedTransition, UnmetCondition
from passport_authz.services.catalog import build_permission_catalog
from passport_authz.services.workflow import WorkflowEngine
from passport_authz.types import DeviceFacts, TransitionResult
from passport_authz.utils.fsm import build_transition_catalog
from tests.test_utils_seed import make_resolver, principal

# Packer/shipper roles that also hold the workflow permissions
WORKFLOW_CATALOG = build_permission_catalog(
    {
        UserRole.SUPPLIER_PACKER: ['workflow.package-to-ship'],
        UserRole.SUPPLIER_SHIPPER: ['workflow.ship-to-transit', 'shipping.*'],
        UserRole.SUPPLIER_QC: ['qc.approve'],
        UserRole.ADMIN: ['*'],
    },
    {role: DataScope.ALL for role in UserRole},
)


@pytest.fixture()
def engine():
    resolver = make_resolver(
        principal('qc', UserRole.QC_INSPECTOR),
        principal('sqc', UserRole.SUPPLIER_QC),
        principal('sadmin', UserRole.SUPPLIER_ADMIN),
        principal('packer', UserRole.SUPPLIER_PACKER),
        principal('admin', UserRole.ADMIN),
    )
    return WorkflowEngine(build_transition_catalog(), resolver)


@pytest.fixture()
def workflow_engine():
    resolver = make_resolver(
        principal('packer', UserRole.SUPPLIER_PACKER),
        principal('shipper', UserRole.SUPPLIER_SHIPPER),
        principal('qc', UserRole.SUPPLIER_QC),
        catalog=WORKFLOW_CATALOG,
    )
    return WorkflowEngine(build_transition_catalog(), resolver)


@pytest.mark.parametrize('pid,allowed', [
    ('qc', True), ('sqc', True), ('sadmin', True), ('admin', True), ('packer', False), ('nobody', False),
])
def test_qc_approval_requires_qc_approve(engine, pid, allowed):
    result = engine.can_transition(pid, S.IN_QC, S.QC_PASSED)
    assert result.allowed is allowed
    if not allowed:
        assert result.required_permission == 'qc.approve'
        assert result.reason == 'Missing required permission: qc.approve'


def test_undefined_transition(engine):
    result = engine.can_transition('admin', S.IN_QC, S.RETIRED)
    assert result == TransitionResult(False, 'No workflow transition defined from IN_QC to RETIRED')
    # no implicit self loops
    assert not engine.can_transition('admin', S.IN_QC, S.IN_QC).allowed


def test_packaging_needs_permission_and_qc_approval(workflow_engine):
    ok = workflow_engine.can_transition('packer', S.QC_PASSED, S.PACKAGED, DeviceFacts(qc_approved=True))
    assert ok == TransitionResult(True)

    no_fact = workflow_engine.can_transition('packer', S.QC_PASSED, S.PACKAGED, DeviceFacts())
    assert no_fact == TransitionResult(False, 'QC approval is required before packaging')
    assert workflow_engine.can_transition('packer', S.QC_PASSED, S.PACKAGED).reason == no_fact.reason

    no_perm = workflow_engine.can_transition('qc', S.QC_PASSED, S.PACKAGED, DeviceFacts(qc_approved=True))
    assert not no_perm.allowed
    assert no_perm.required_permission == 'workflow.package-to-ship'
    assert no_perm.reason != no_fact.reason


def test_permission_is_checked_before_conditions(workflow_engine):
    result = workflow_engine.can_transition('qc', S.PACKAGED, S.IN_TRANSIT, DeviceFacts())
    assert result.required_permission == 'workflow.ship-to-transit'


def test_shipping_conditions_short_circuit_in_order(workflow_engine):
    nothing = workflow_engine.can_transition('shipper', S.PACKAGED, S.IN_TRANSIT, DeviceFacts())
    assert nothing.reason == 'Packaging must be completed before shipping'
    no_tracking = workflow_engine.can_transition('shipper', S.PACKAGED, S.IN_TRANSIT, DeviceFacts(package_complete=True))
    assert no_tracking.reason == 'Tracking number is required for shipping'
    empty_tracking = workflow_engine.can_transition(
        'shipper', S.PACKAGED, S.IN_TRANSIT, DeviceFacts(package_complete=True, tracking_number=''))
    assert empty_tracking.reason == 'Tracking number is required for shipping'
    ok = workflow_engine.can_transition(
        'shipper', S.PACKAGED, S.IN_TRANSIT, DeviceFacts(package_complete=True, tracking_number='SF123'))
    assert ok.allowed


def test_transition_raises_by_failure_kind(workflow_engine):
    with pytest.raises(MissingPermission) as exc:
        workflow_engine.transition('qc', S.QC_PASSED, S.PACKAGED, DeviceFacts(qc_approved=True))
    assert isinstance(exc.value, Forbidden)
    assert exc.value.permission == 'workflow.package-to-ship'
    assert exc.value.transition == (S.QC_PASSED, S.PACKAGED)

    with pytest.raises(UndefinedTransition) as exc:
        workflow_engine.transition('packer', S.PACKAGED, S.QC_PASSED)
    assert isinstance(exc.value, InvalidOperation)
    assert (exc.value.from_state, exc.value.to_state) == (S.PACKAGED, S.QC_PASSED)

    with pytest.raises(UnmetCondition) as exc:
        workflow_engine.transition('packer', S.QC_PASSED, S.PACKAGED)
    assert isinstance(exc.value, InvalidOperation)
    assert exc.value.condition == 'require_qc_approval'
    assert exc.value.detail == 'QC approval is required before packaging'


def test_transition_success_returns_rule_and_logs(workflow_engine, caplog):
    with caplog.at_level(logging.INFO, logger='passport_authz.services.workflow'):
        rule = workflow_engine.transition('packer', S.QC_PASSED, S.PACKAGED, DeviceFacts(qc_approved=True))
    assert rule.required_permission == 'workflow.package-to-ship'
    assert 'from QC_PASSED to PACKAGED' in caplog.text


def test_available_transitions_report_permission_as_data(engine):
    listing = engine.get_available_transitions('sqc', S.IN_QC)
    assert [(t.to_state, t.has_permission, t.required_permission) for t in listing] == [
        (S.QC_PASSED, True, 'qc.approve'),
        (S.QC_FAILED, False, 'qc.reject'),
    ]
    assert listing[0].description == 'QC Inspector approves quality check'
    # unknown principals get the listing too, all without permission
    assert [t.has_permission for t in engine.get_available_transitions('nobody', S.IN_QC)] == [False, False]
    assert engine.get_available_transitions('admin', S.RETIRED) == []


def test_available_transitions_ignore_business_conditions(workflow_engine):
    listing = workflow_engine.get_available_transitions('packer', S.QC_PASSED)
    assert len(listing) == 1 and listing[0].has_permission is True


def test_workflow_path(engine):
    assert engine.get_workflow_path(S.IN_QC, S.DELIVERED) == [S.IN_QC, S.QC_PASSED, S.PACKAGED, S.IN_TRANSIT, S.DELIVERED]
    assert engine.get_workflow_path(S.DELIVERED, S.IN_QC) == []


def test_role_workflow_capabilities(engine, workflow_engine):
    assert engine.get_role_workflow_capabilities('admin') == {
        'can_approve_qc': True, 'can_package': True, 'can_ship': True, 'can_deliver': True,
    }
    assert engine.get_role_workflow_capabilities('sqc') == {
        'can_approve_qc': True, 'can_package': False, 'can_ship': False, 'can_deliver': False,
    }
    assert workflow_engine.get_role_workflow_capabilities('shipper')['can_deliver'] is True
    assert not any(engine.get_role_workflow_capabilities('nobody').values())
