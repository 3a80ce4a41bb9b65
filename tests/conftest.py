import pytest

from bookshelf import create_app
from bookshelf.auth import hash_password
from bookshelf.models import db
from bookshelf.store import CredentialStore


@pytest.fixture
def app(tmp_path):
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "bookshelf-test-secret",
        "SESSION_TOKEN_SECURE": False,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'books.db'}",
        "CATALOG_SEARCH_URL": "https://catalog.test/search.json",
        "CATALOG_COVER_URL": "https://covers.test/b",
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def store(app):
    with app.app_context():
        yield CredentialStore()


@pytest.fixture
def make_user(app):
    def _make(username, password="hunter22"):
        with app.app_context():
            return CredentialStore().create_user(username, hash_password(password))
    return _make


@pytest.fixture
def login(client):
    def _login(username, password="hunter22"):
        return client.post("/login", data={"Username": username, "Password": password})
    return _login
