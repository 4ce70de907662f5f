import pytest
from movielibrary.app import app as flask_app
from movielibrary.session_manager import reset_session_manager


@pytest.fixture(autouse=True)
def clean_sessions():
    """Give every test a fresh session registry."""
    reset_session_manager()

    yield

    reset_session_manager()


@pytest.fixture
def app():
    """Configure the Flask app for testing."""
    flask_app.config['TESTING'] = True
    flask_app.config['SECRET_KEY'] = 'test-secret-key'
    yield flask_app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()
