import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.pool import StaticPool

from welfare_registry.core.db import Store
from welfare_registry.main import app
from welfare_registry.models.base import Base
from welfare_registry.models import entities  # noqa: F401


engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
testing_store = Store(engine)

app.state.store = testing_store


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def store():
    return testing_store


@pytest.fixture
def db_session():
    db = testing_store.session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def executed_statements():
    """Collect every SQL statement sent to the test engine while active."""
    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    yield statements
    event.remove(engine, "before_cursor_execute", record)


@pytest.fixture
def member_payload():
    counter = iter(range(1, 10_000))

    def build(**overrides):
        index = next(counter)
        payload = {
            "first_name": "Amina",
            "last_name": "Haddad",
            "gender": "Female",
            "marital_status": "Single",
            "address": "12 Olive Street, Nablus",
            "email": f"member{index}@example.com",
            "date_of_birth": "2001-04-12",
            "phone_number": "0599123456",
            "is_working": True,
            "is_person_charge": False,
            "proficient": "tailoring",
            "total_income": 350.0,
            "education_level": "secondary",
        }
        payload.update(overrides)
        return payload

    return build


@pytest.fixture
def family_payload(member_payload):
    def build(member_count=2, **overrides):
        payload = {
            "house_condition": "needs roof repair",
            "notes": "referred by district office",
            "family_category": "Orphans",
            "members": [member_payload() for _ in range(member_count)],
        }
        payload.update(overrides)
        return payload

    return build
