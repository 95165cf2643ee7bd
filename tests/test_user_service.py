"""
Tests for signup, login, token checks and profile updates.
"""

import unittest
from datetime import timedelta
from unittest.mock import patch

from helpers import DatabaseTestCase

from quickchat.core import user as user_service
from quickchat.core.errors import AuthError, ConflictError, UpstreamError, ValidationError
from quickchat.core.security import create_token


class TestSignup(DatabaseTestCase):

    def test_signup_returns_token_and_user(self):
        token, user = user_service.signup(self.db, "A", "a@x.com", "p", "b")
        self.assertTrue(token)
        self.assertEqual(user.email, "a@x.com")
        self.assertEqual(user.fullname, "A")
        self.assertNotEqual(user.password_hash, "p")

    def test_email_is_normalized(self):
        _, user = user_service.signup(self.db, "A", "  Mixed@Case.COM ", "p", "b")
        self.assertEqual(user.email, "mixed@case.com")

    def test_duplicate_email_any_casing_conflicts(self):
        user_service.signup(self.db, "A", "a@x.com", "p", "b")
        with self.assertRaises(ConflictError) as ctx:
            user_service.signup(self.db, "A2", "A@X.com ", "p2", "b2")
        self.assertEqual(ctx.exception.message, "User already exists")

    def test_missing_fields_rejected(self):
        for fields in (
            (None, "a@x.com", "p", "b"),
            ("A", "", "p", "b"),
            ("A", "a@x.com", None, "b"),
            ("A", "a@x.com", "p", "   "),
        ):
            with self.subTest(fields=fields):
                with self.assertRaises(ValidationError) as ctx:
                    user_service.signup(self.db, *fields)
                self.assertEqual(ctx.exception.message, "All fields are required")


class TestLogin(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        user_service.signup(self.db, "A", "a@x.com", "pw", "b")

    def test_login_token_passes_check_auth(self):
        token, user = user_service.login(self.db, "a@x.com", "pw")
        self.assertEqual(user_service.check_auth(self.db, token).id, user.id)

    def test_login_normalizes_email(self):
        _, user = user_service.login(self.db, " A@X.COM", "pw")
        self.assertEqual(user.email, "a@x.com")

    def test_wrong_password(self):
        with self.assertRaises(AuthError) as ctx:
            user_service.login(self.db, "a@x.com", "nope")
        self.assertEqual(ctx.exception.message, "Invalid credentials")

    def test_unknown_user(self):
        with self.assertRaises(AuthError) as ctx:
            user_service.login(self.db, "ghost@x.com", "pw")
        self.assertEqual(ctx.exception.message, "Invalid credentials")

    def test_expired_token_fails_check_auth(self):
        _, user = user_service.login(self.db, "a@x.com", "pw")
        expired = create_token(user.id, expires_delta=timedelta(seconds=-5))
        with self.assertRaises(AuthError):
            user_service.check_auth(self.db, expired)

    def test_token_for_unknown_user_fails_check_auth(self):
        with self.assertRaises(AuthError):
            user_service.check_auth(self.db, create_token("no-such-user"))


class TestUpdateProfile(DatabaseTestCase):

    def setUp(self):
        super().setUp()
        _, self.user = user_service.signup(self.db, "A", "a@x.com", "pw", "old bio")

    def test_merges_only_supplied_fields(self):
        updated = user_service.update_profile(self.db, self.user.id, bio="new bio")
        self.assertEqual(updated.bio, "new bio")
        self.assertEqual(updated.fullname, "A")
        self.assertEqual(updated.profilepic, "")

    @patch("quickchat.core.user.upload_image", return_value="https://cdn.test/pic.png")
    def test_profilepic_uploaded_and_url_stored(self, mock_upload):
        updated = user_service.update_profile(
            self.db, self.user.id, fullname="B", profilepic="data:image/png;base64,AAAA"
        )
        mock_upload.assert_called_once_with("data:image/png;base64,AAAA")
        self.assertEqual(updated.profilepic, "https://cdn.test/pic.png")
        self.assertEqual(updated.fullname, "B")

    @patch("quickchat.core.user.upload_image", side_effect=UpstreamError("Image upload failed: boom"))
    def test_upload_failure_leaves_record_unchanged(self, _):
        with self.assertRaises(UpstreamError):
            user_service.update_profile(self.db, self.user.id, bio="x", profilepic="data:...")
        self.db.rollback()
        self.assertEqual(user_service.get_user(self.db, self.user.id).bio, "old bio")

    def test_blank_fullname_rejected(self):
        with self.assertRaises(ValidationError):
            user_service.update_profile(self.db, self.user.id, fullname="  ")


if __name__ == "__main__":
    unittest.main()
