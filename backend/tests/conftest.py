import os, sys, pytest
# Ensure backend directory is on path so 'passport_authz' can be imported
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)
from passport_authz import create_app, get_db
from passport_authz.models.authz import Base
# Import all model modules to ensure tables are registered before create_all
import passport_authz.models.device_passport  # noqa: F401
import passport_authz.models.service_request  # noqa: F401

TEST_CONFIG = {
    'DATABASE_URL': 'sqlite+pysqlite:///:memory:',
    'JWT_SECRET_KEY': 'test-secret-key-that-is-long-enough-for-hs256',
    'TESTING': True,
}


@pytest.fixture(scope='session', autouse=True)
def app_instance():
    app = create_app(TEST_CONFIG)
    with app.app_context():
        engine = get_db().get_bind()
        Base.metadata.create_all(engine)
    yield app


@pytest.fixture()
def client(app_instance):
    return app_instance.test_client()
