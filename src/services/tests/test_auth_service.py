"""Unit tests for auth_service module."""

import unittest
from datetime import datetime, timedelta, timezone

from jose import jwt

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import (
    DuplicateEmailError,
    InvalidCredentialsError,
    InvalidTokenError,
    MissingTokenError,
    ValidationError,
)
from domain.model.user import Membership
from services.auth_service import authenticate, create_access_token, login, register
from utils.settings import Settings

TEST_SETTINGS = Settings(jwt_secret_key='test-secret', bcrypt_rounds=4)


class TestRegister(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()

    def test_register_success(self):
        result = register(self.repo, TEST_SETTINGS, name='Ann', email='ann@x.com', password='secret123')

        self.assertTrue(result.token)
        self.assertEqual(result.user.email, 'ann@x.com')
        self.assertEqual(result.user.membership, Membership.BASIC)
        self.assertEqual(
            result.user.avatar,
            'https://ui-avatars.com/api/?name=Ann&background=007bff',
        )
        self.assertEqual(authenticate(TEST_SETTINGS, result.token), result.user.id)

    def test_password_is_hashed(self):
        result = register(self.repo, TEST_SETTINGS, name='Ann', email='ann@x.com', password='secret123')

        stored = self.repo.get_by_id(result.user.id)
        self.assertNotEqual(stored.password_hash, 'secret123')
        self.assertTrue(stored.password_hash.startswith('$2b$'))

    def test_placeholder_avatar_encodes_name(self):
        result = register(self.repo, TEST_SETTINGS, name='Ann Lee', email='ann@x.com', password='pw')
        self.assertIn('name=Ann%20Lee', result.user.avatar)

    def test_empty_fields_rejected(self):
        cases = [
            dict(name='', email='ann@x.com', password='pw'),
            dict(name='Ann', email='   ', password='pw'),
            dict(name='Ann', email='ann@x.com', password=''),
            dict(name=None, email='ann@x.com', password='pw'),
        ]
        for fields in cases:
            with self.subTest(fields=fields):
                with self.assertRaises(ValidationError):
                    register(self.repo, TEST_SETTINGS, **fields)
        self.assertEqual(self.repo.count(), 0)

    def test_overlong_password_rejected(self):
        with self.assertRaises(ValidationError):
            register(self.repo, TEST_SETTINGS, name='Ann', email='ann@x.com', password='x' * 73)

    def test_duplicate_email_rejected(self):
        register(self.repo, TEST_SETTINGS, name='Ann', email='ann@x.com', password='secret123')

        with self.assertRaises(DuplicateEmailError):
            register(self.repo, TEST_SETTINGS, name='Other', email='ann@x.com', password='other')
        self.assertEqual(self.repo.count(), 1)


class TestLogin(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.registered = register(self.repo, TEST_SETTINGS, name='Ann', email='ann@x.com', password='secret123')

    def test_login_success_sets_last_login(self):
        result = login(self.repo, TEST_SETTINGS, email='ann@x.com', password='secret123')

        self.assertEqual(result.user.id, self.registered.user.id)
        self.assertIsNotNone(result.user.last_login)
        self.assertIsNotNone(self.repo.get_by_id(result.user.id).last_login)
        self.assertEqual(authenticate(TEST_SETTINGS, result.token), result.user.id)

    def test_wrong_password_and_unknown_email_are_indistinguishable(self):
        with self.assertRaises(InvalidCredentialsError) as wrong_pw:
            login(self.repo, TEST_SETTINGS, email='ann@x.com', password='wrong')
        with self.assertRaises(InvalidCredentialsError) as unknown:
            login(self.repo, TEST_SETTINGS, email='nobody@x.com', password='secret123')

        self.assertEqual(str(wrong_pw.exception), str(unknown.exception))

    def test_failed_login_does_not_touch_last_login(self):
        with self.assertRaises(InvalidCredentialsError):
            login(self.repo, TEST_SETTINGS, email='ann@x.com', password='wrong')
        self.assertIsNone(self.repo.get_by_id(self.registered.user.id).last_login)

    def test_missing_fields(self):
        with self.assertRaises(ValidationError):
            login(self.repo, TEST_SETTINGS, email='', password='secret123')
        with self.assertRaises(ValidationError):
            login(self.repo, TEST_SETTINGS, email='ann@x.com', password=None)


class TestTokens(unittest.TestCase):

    def test_round_trip(self):
        token = create_access_token(TEST_SETTINGS, 'user-1')
        self.assertEqual(authenticate(TEST_SETTINGS, token), 'user-1')

    def test_expiry_comes_from_settings(self):
        settings = Settings(jwt_secret_key='test-secret', jwt_expiration_minutes=60)
        token = create_access_token(settings, 'user-1')

        claims = jwt.get_unverified_claims(token)
        lifetime = claims['exp'] - claims['iat']
        self.assertAlmostEqual(lifetime, 3600, delta=1)

    def test_missing_token(self):
        for token in (None, ''):
            with self.assertRaises(MissingTokenError):
                authenticate(TEST_SETTINGS, token)

    def test_malformed_token(self):
        with self.assertRaises(InvalidTokenError):
            authenticate(TEST_SETTINGS, 'not-a-jwt')

    def test_wrong_key(self):
        token = create_access_token(Settings(jwt_secret_key='other-key'), 'user-1')
        with self.assertRaises(InvalidTokenError):
            authenticate(TEST_SETTINGS, token)

    def test_expired_token(self):
        past = datetime.now(timezone.utc) - timedelta(hours=2)
        token = jwt.encode(
            {'sub': 'user-1', 'iat': past, 'exp': past + timedelta(hours=1)},
            'test-secret', algorithm='HS256',
        )
        with self.assertRaises(InvalidTokenError):
            authenticate(TEST_SETTINGS, token)

    def test_token_without_subject(self):
        token = jwt.encode(
            {'exp': datetime.now(timezone.utc) + timedelta(hours=1)},
            'test-secret', algorithm='HS256',
        )
        with self.assertRaises(InvalidTokenError):
            authenticate(TEST_SETTINGS, token)


if __name__ == '__main__':
    unittest.main()
