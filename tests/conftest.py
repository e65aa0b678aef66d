import mongomock
import pytest

from app import create_app


class TestingConfig:
    TESTING = True
    SENDGRID_API_KEY = None


@pytest.fixture
def db():
    return mongomock.MongoClient(tz_aware=True)["BloodLinkDB"]


@pytest.fixture
def app(db):
    return create_app(TestingConfig, db=db)


@pytest.fixture
def client(app):
    return app.test_client()
