"""
Pytest Configuration and Fixtures
"""
import pytest

from feepay import create_app
from feepay.providers.swiftpay_provider import SwiftPayProvider


@pytest.fixture(scope='function')
def app():
    """Create application for testing"""
    app = create_app('testing')

    # Establish application context
    ctx = app.app_context()
    ctx.push()

    yield app

    ctx.pop()


@pytest.fixture(scope='function')
def client(app):
    """Create a test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def cli_runner(app):
    return app.test_cli_runner()


@pytest.fixture
def swiftpay_config():
    return {
        'api_key':  'sp_test_key',
        'till_id':  'till-001',
        'base_url': 'https://swiftpay.test',
        'timeout':  5,
    }


@pytest.fixture
def swiftpay_provider(swiftpay_config):
    return SwiftPayProvider(swiftpay_config)
