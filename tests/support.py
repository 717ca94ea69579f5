"""Shared test harness: in-memory SQLite database, API client, signup and token helpers."""

import unittest
import uuid
from collections.abc import Generator
from typing import Any

from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import get_settings
from app.core.database import get_db
from app.core.security import create_access_token
from app.main import app
from app.models import Base, Profile

WEBHOOK_SECRET = "test-webhook-secret"


def make_session_factory() -> sessionmaker:
    """Fresh in-memory SQLite database with every table and foreign keys enforced."""
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def bearer(user_id: uuid.UUID) -> dict[str, str]:
    """Authorization header carrying a provider-style token for user_id."""
    return {"Authorization": f"Bearer {create_access_token(sub=user_id)}"}


class ApiTestCase(unittest.TestCase):
    """Runs the FastAPI app against a private SQLite database per test."""

    webhook_secret: str | None = WEBHOOK_SECRET

    def setUp(self) -> None:
        self.SessionLocal = make_session_factory()

        def override_get_db() -> Generator[Session, None, None]:
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        secret = SecretStr(self.webhook_secret) if self.webhook_secret else None
        test_settings = get_settings().model_copy(update={"IDENTITY_WEBHOOK_SECRET": secret})
        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_settings] = lambda: test_settings
        self.client = TestClient(app)
        self.prefix = test_settings.API_V1_PREFIX

    def tearDown(self) -> None:
        app.dependency_overrides.clear()

    def url(self, path: str) -> str:
        return f"{self.prefix}{path}"

    def signup(self, email: str, **metadata: Any) -> uuid.UUID:
        """Report a new identity through the webhook and return its id."""
        identity_id = uuid.uuid4()
        response = self.client.post(
            self.url("/identity/signup"),
            json={"id": str(identity_id), "email": email, "user_metadata": metadata},
            headers={"X-Webhook-Secret": WEBHOOK_SECRET},
        )
        self.assertEqual(response.status_code, 201, response.text)
        return identity_id

    def set_profile(self, user_id: uuid.UUID, **values: Any) -> None:
        """Write profile columns directly, bypassing the API policies."""
        with self.SessionLocal() as db:
            profile = db.get(Profile, user_id)
            for field, value in values.items():
                setattr(profile, field, value)
            db.commit()

    def make_admin(self, email: str = "admin@example.com") -> uuid.UUID:
        admin_id = self.signup(email, full_name="Admin")
        self.set_profile(admin_id, role="admin")
        return admin_id

    def load_profile(self, user_id: uuid.UUID) -> Profile | None:
        with self.SessionLocal() as db:
            return db.get(Profile, user_id)
