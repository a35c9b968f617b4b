"""Unit tests for qr_service module."""

import base64
import json
import unittest
from datetime import datetime, timezone

from adapter.fake.qr_encoder import FakeQrEncoder
from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import EncodeError, NotFoundError
from domain.model.qr import PublicQrPayload, QrFormat, SelfQrPayload
from services.auth_service import register
from services.qr_service import (
    build_public_payload,
    build_self_payload,
    encode,
    generate_for_user,
    lookup_by_user_id,
)
from utils.settings import Settings

TEST_SETTINGS = Settings(jwt_secret_key='test-secret', bcrypt_rounds=4, client_url='https://app.example.com')
FIXED_NOW = datetime(2026, 10, 19, 8, 30, 0, 123456, tzinfo=timezone.utc)


class TestPayloads(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.user = register(self.repo, TEST_SETTINGS, name='Ann', email='ann@x.com', password='pw').user

    def test_public_payload_shape(self):
        payload = build_public_payload(self.user)

        self.assertEqual(payload.to_dict(), {'name': 'Ann', 'email': 'ann@x.com', 'membership': 'Basic'})
        self.assertEqual(payload.serialize(), '{"name":"Ann","email":"ann@x.com","membership":"Basic"}')

    def test_self_payload_shape(self):
        payload = build_self_payload(self.user, TEST_SETTINGS, now=FIXED_NOW)

        self.assertEqual(payload.to_dict(), {
            'userId': self.user.id,
            'name': 'Ann',
            'email': 'ann@x.com',
            'membership': 'Basic',
            'profileUrl': f'https://app.example.com/user/{self.user.id}',
            'generatedAt': '2026-10-19T08:30:00.123Z',
        })
        self.assertEqual(list(json.loads(payload.serialize())), [
            'userId', 'name', 'email', 'membership', 'profileUrl', 'generatedAt',
        ])

    def test_payloads_never_carry_password(self):
        for payload in (build_public_payload(self.user), build_self_payload(self.user, TEST_SETTINGS)):
            self.assertNotIn('password', payload.serialize())
            self.assertNotIn(self.repo.get_by_id(self.user.id).password_hash, payload.serialize())


class TestEncode(unittest.TestCase):

    def setUp(self):
        self.encoder = FakeQrEncoder()
        self.payload = PublicQrPayload(name='Ann', email='ann@x.com', membership='Basic')

    def test_png_data_url(self):
        url = encode(self.encoder, self.payload)

        self.assertTrue(url.startswith('data:image/png;base64,'))
        self.assertEqual(self.encoder.calls, [(self.payload.serialize(), QrFormat.PNG)])
        raw = base64.b64decode(url.split(',', 1)[1])
        self.assertTrue(raw.startswith(b'png:'))

    def test_svg_data_url(self):
        url = encode(self.encoder, self.payload, QrFormat.SVG)
        self.assertTrue(url.startswith('data:image/svg+xml;base64,'))

    def test_deterministic(self):
        self.assertEqual(encode(self.encoder, self.payload), encode(self.encoder, self.payload))

    def test_self_payload_with_fixed_time_is_deterministic(self):
        payload = SelfQrPayload(
            user_id='u1', name='Ann', email='ann@x.com', membership='Basic',
            profile_url='https://app.example.com/user/u1', generated_at=FIXED_NOW,
        )
        self.assertEqual(encode(self.encoder, payload), encode(self.encoder, payload))

    def test_encoder_failure_becomes_encode_error(self):
        encoder = FakeQrEncoder(error=RuntimeError('data too long'))

        with self.assertRaises(EncodeError):
            encode(encoder, self.payload)


class TestLookupAndGenerate(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.encoder = FakeQrEncoder()
        self.user = register(self.repo, TEST_SETTINGS, name='Ann', email='ann@x.com', password='pw').user

    def test_lookup_by_user_id(self):
        payload, avatar = lookup_by_user_id(self.repo, self.user.id)

        self.assertEqual(payload, PublicQrPayload(name='Ann', email='ann@x.com', membership='Basic'))
        self.assertEqual(avatar, self.user.avatar)

    def test_lookup_missing(self):
        with self.assertRaises(NotFoundError):
            lookup_by_user_id(self.repo, 'gone')

    def test_generate_for_user(self):
        qr_code, payload = generate_for_user(self.repo, self.encoder, TEST_SETTINGS, self.user.id, QrFormat.SVG)

        self.assertTrue(qr_code.startswith('data:image/svg+xml;base64,'))
        self.assertEqual(payload.user_id, self.user.id)
        self.assertEqual(payload.profile_url, f'https://app.example.com/user/{self.user.id}')
        self.assertEqual(self.encoder.calls[0][0], payload.serialize())

    def test_generate_for_missing_user(self):
        with self.assertRaises(NotFoundError):
            generate_for_user(self.repo, self.encoder, TEST_SETTINGS, 'gone')
        self.assertEqual(self.encoder.calls, [])


if __name__ == '__main__':
    unittest.main()
