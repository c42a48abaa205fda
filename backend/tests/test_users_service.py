"""Tests for system user administration."""

from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from app.models.auth import Profile, UserRole
from app.schemas.user import UserCreateRequest
from app.services.gateway import RecordNotFoundError
from app.services.session import SignUpError
from app.services.users import filter_users, list_users, toggle_user_active, update_user_role
from db_case import DatabaseTestCase


class UsersServiceTests(DatabaseTestCase):
    def _roles(self, user_id: str) -> list[str]:
        return sorted(self.db.scalars(select(UserRole.role).where(UserRole.user_id == user_id)).all())

    def test_admin_grant_only_when_admin_requested(self) -> None:
        plain = self.create_account("user@example.com")
        admin = self.create_account("admin@example.com", role="admin")

        self.assertEqual(plain.role, "user")
        self.assertEqual(self._roles(plain.id), [])
        self.assertEqual(self._roles(admin.id), ["admin"])

    def test_duplicate_email_is_rejected(self) -> None:
        self.create_account("user@example.com")

        with self.assertRaises(SignUpError):
            self.create_account("user@example.com")

    def test_create_request_validation(self) -> None:
        with self.assertRaises(ValidationError):
            UserCreateRequest(email="bad", password="secret1", full_name="Ana")
        with self.assertRaises(ValidationError):
            UserCreateRequest(email="a@example.com", password="short", full_name="Ana")
        with self.assertRaises(ValidationError):
            UserCreateRequest(email="a@example.com", password="secret1", full_name="A")
        with self.assertRaises(ValidationError):
            UserCreateRequest(email="a@example.com", password="secret1", full_name="Ana", role="owner")

    def test_list_joins_roles_newest_first(self) -> None:
        older = self.create_account("older@example.com", full_name="Older")
        newer = self.create_account("newer@example.com", role="admin", full_name="Newer")
        self.db.get(Profile, older.id).created_at = datetime.now(timezone.utc) - timedelta(days=1)
        self.db.commit()

        users = list_users(self.db)

        self.assertEqual([user.id for user in users], [newer.id, older.id])
        self.assertEqual([user.role for user in users], ["admin", "user"])

    def test_search_by_name_or_email(self) -> None:
        self.create_account("ana@example.com", full_name="Ana Rivera")
        self.create_account("ben@corp.io", full_name="Ben Okafor")
        users = list_users(self.db)

        self.assertEqual([user.email for user in filter_users(users, "RIVERA")], ["ana@example.com"])
        self.assertEqual([user.email for user in filter_users(users, "corp")], ["ben@corp.io"])
        self.assertEqual(len(filter_users(users, "  ")), 2)

    def test_role_change_is_visible_on_fresh_fetch(self) -> None:
        created = self.create_account("user@example.com")

        update_user_role(self.db, created.id, "admin")
        self.assertEqual(list_users(self.db)[0].role, "admin")
        self.assertEqual(self._roles(created.id), ["admin"])

        update_user_role(self.db, created.id, "user")
        self.assertEqual(list_users(self.db)[0].role, "user")
        self.assertEqual(self._roles(created.id), ["user"])

    def test_role_update_falls_back_when_upsert_is_rejected(self) -> None:
        created = self.create_account("user@example.com", role="admin")
        rejected = OperationalError("INSERT ... ON CONFLICT", {}, Exception("upsert unsupported"))

        with patch("app.services.users._upsert_role", side_effect=rejected):
            update_user_role(self.db, created.id, "user")

        self.assertEqual(self._roles(created.id), ["user"])

    def test_role_update_for_unknown_user(self) -> None:
        with self.assertRaises(RecordNotFoundError):
            update_user_role(self.db, "missing", "admin")

    def test_toggle_active_flips_flag(self) -> None:
        created = self.create_account("user@example.com")

        self.assertFalse(toggle_user_active(self.db, created.id).is_active)
        self.assertTrue(toggle_user_active(self.db, created.id).is_active)
        with self.assertRaises(RecordNotFoundError):
            toggle_user_active(self.db, "missing")


if __name__ == "__main__":
    unittest.main()
