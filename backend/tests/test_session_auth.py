"""Tests for password hashing, session tokens and the session context."""

from __future__ import annotations

import unittest
from datetime import timedelta

from app.models.auth import AuthSession, Profile
from app.services.security import digest_secret, generate_token, hash_password, parse_token, verify_password
from app.services.session import (
    AuthError,
    SignUpError,
    close_session,
    get_user_role,
    open_session,
    resolve_session,
    sign_up,
)
from db_case import DatabaseTestCase


class SecurityTests(unittest.TestCase):
    def test_password_hash_round_trip(self) -> None:
        hashed = hash_password("secret1")

        self.assertNotEqual(hashed, "secret1")
        self.assertTrue(verify_password("secret1", hashed))
        self.assertFalse(verify_password("secret2", hashed))
        self.assertFalse(verify_password("secret1", "not-a-hash"))

    def test_token_layout(self) -> None:
        token_id, secret, token = generate_token()

        self.assertTrue(token.startswith("ap_sess_"))
        parsed = parse_token(token)
        self.assertEqual(parsed.token_id, token_id)
        self.assertEqual(parsed.secret, secret)
        self.assertEqual(len(digest_secret(secret)), 64)
        self.assertIsNone(parse_token("Bearer nonsense"))
        self.assertIsNone(parse_token(None))


class SessionContextTests(DatabaseTestCase):
    def test_sign_up_creates_profile_and_rejects_duplicates(self) -> None:
        user = sign_up(self.db, email=" Ana@Example.com ", password="secret1", full_name="Ana")

        profile = self.db.get(Profile, user.id)
        self.assertEqual(user.email, "ana@example.com")
        self.assertEqual(profile.full_name, "Ana")
        self.assertTrue(profile.is_active)
        with self.assertRaises(SignUpError):
            sign_up(self.db, email="ana@example.com", password="secret1")

    def test_sign_in_resolves_identity_and_role(self) -> None:
        self.create_account("admin@example.com", role="admin", full_name="Admin")

        token, context = open_session(self.db, email="ADMIN@example.com", password="secret1")
        resolved = resolve_session(self.db, token)

        self.assertTrue(context.is_admin)
        self.assertEqual(resolved, context)
        self.assertEqual(resolved.full_name, "Admin")

    def test_users_without_grant_are_plain_users(self) -> None:
        created = self.create_account("user@example.com")

        self.assertEqual(get_user_role(self.db, created.id), "user")

    def test_wrong_password_is_rejected(self) -> None:
        self.create_account("user@example.com")

        with self.assertRaises(AuthError) as ctx:
            open_session(self.db, email="user@example.com", password="wrong-password")
        self.assertEqual(ctx.exception.message, "Invalid login credentials")

    def test_deactivated_accounts_cannot_sign_in_or_resolve(self) -> None:
        created = self.create_account("user@example.com")
        token, _ = open_session(self.db, email="user@example.com", password="secret1")
        self.db.get(Profile, created.id).is_active = False
        self.db.commit()

        with self.assertRaises(AuthError) as ctx:
            resolve_session(self.db, token)
        self.assertEqual(ctx.exception.message, "Account is deactivated")
        with self.assertRaises(AuthError):
            open_session(self.db, email="user@example.com", password="secret1")

    def test_expired_session_is_removed(self) -> None:
        self.create_account("user@example.com")
        token, context = open_session(
            self.db, email="user@example.com", password="secret1", ttl=timedelta(seconds=-1)
        )

        with self.assertRaises(AuthError) as ctx:
            resolve_session(self.db, token)
        self.assertEqual(ctx.exception.message, "Session expired")
        self.assertIsNone(self.db.get(AuthSession, context.token_id))

    def test_tampered_secret_is_rejected(self) -> None:
        self.create_account("user@example.com")
        token, _ = open_session(self.db, email="user@example.com", password="secret1")

        with self.assertRaises(AuthError):
            resolve_session(self.db, token[:-4] + "abcd")

    def test_sign_out_revokes_token(self) -> None:
        self.create_account("user@example.com")
        token, _ = open_session(self.db, email="user@example.com", password="secret1")

        self.assertTrue(close_session(self.db, token))
        self.assertFalse(close_session(self.db, token))
        with self.assertRaises(AuthError):
            resolve_session(self.db, token)


if __name__ == "__main__":
    unittest.main()
