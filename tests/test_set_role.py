"""Operator bootstrap CLI: app.scripts.set_role."""

import unittest
import uuid
from unittest.mock import patch

from sqlalchemy import select

from app.models import ActivityLog, Identity, Profile
from app.scripts.set_role import main, set_role
from tests.support import make_session_factory


class TestSetRole(unittest.TestCase):
    def setUp(self) -> None:
        self.SessionLocal = make_session_factory()
        self.identity_id = uuid.uuid4()
        with self.SessionLocal() as db:
            db.add(Identity(id=self.identity_id, email="first@example.com"))
            db.commit()

    def test_promotes_existing_profile_and_audits(self) -> None:
        with self.SessionLocal() as db:
            profile = set_role(db, "first@example.com", "admin")
            self.assertIsNotNone(profile)
            entries = db.scalars(select(ActivityLog)).all()
        self.assertEqual(profile.role, "admin")
        self.assertEqual(len(entries), 1)
        self.assertIsNone(entries[0].user_id)
        self.assertEqual(entries[0].entity_id, self.identity_id)

    def test_can_deactivate(self) -> None:
        with self.SessionLocal() as db:
            set_role(db, "first@example.com", "user", is_active=False)
        with self.SessionLocal() as db:
            self.assertFalse(db.get(Profile, self.identity_id).is_active)

    def test_unknown_email(self) -> None:
        with self.SessionLocal() as db:
            self.assertIsNone(set_role(db, "nobody@example.com", "admin"))

    def test_main_exit_codes(self) -> None:
        with patch("app.scripts.set_role.SessionLocal", self.SessionLocal):
            self.assertEqual(main(["first@example.com", "admin"]), 0)
            self.assertEqual(main(["nobody@example.com", "admin"]), 1)
        with self.SessionLocal() as db:
            self.assertEqual(db.get(Profile, self.identity_id).role, "admin")

    def test_main_rejects_unknown_role(self) -> None:
        with self.assertRaises(SystemExit):
            main(["first@example.com", "superuser"])


if __name__ == "__main__":
    unittest.main()
