"""Tests for /api/qrcode routes, including the register/login/lookup scenario."""

import unittest

from fastapi.testclient import TestClient

from adapter.fake.qr_encoder import FakeQrEncoder
from adapter.fake.user_repository import FakeUserRepository
from api.dependencies import get_qr_encoder, get_user_repo
from api.main import app
from utils.settings import Settings, get_settings

TEST_SETTINGS = Settings(jwt_secret_key='test-secret', bcrypt_rounds=4, client_url='https://app.example.com')


class TestQrcodeRoutes(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)
        self.repo = FakeUserRepository()
        self.encoder = FakeQrEncoder()
        app.dependency_overrides[get_user_repo] = lambda: self.repo
        app.dependency_overrides[get_qr_encoder] = lambda: self.encoder
        app.dependency_overrides[get_settings] = lambda: TEST_SETTINGS

    def tearDown(self):
        app.dependency_overrides.clear()

    def _register(self):
        data = self.client.post('/api/auth/register', json={
            'name': 'Ann', 'email': 'ann@x.com', 'password': 'secret123',
        }).json()
        return data['user']['id'], {'Authorization': f"Bearer {data['token']}"}

    # ── generate ──────────────────────────────────────────────

    def test_generate_requires_token(self):
        self.assertEqual(self.client.post('/api/qrcode/generate').status_code, 401)

    def test_generate(self):
        user_id, headers = self._register()

        response = self.client.post('/api/qrcode/generate', headers=headers)

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data['qrCode'].startswith('data:image/png;base64,'))
        self.assertEqual(data['userData']['userId'], user_id)
        self.assertEqual(data['userData']['profileUrl'], f'https://app.example.com/user/{user_id}')
        self.assertTrue(data['userData']['generatedAt'].endswith('Z'))

    def test_generate_svg(self):
        _, headers = self._register()

        response = self.client.post('/api/qrcode/generate?format=svg', headers=headers)

        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.json()['qrCode'].startswith('data:image/svg+xml;base64,'))

    def test_unknown_format(self):
        _, headers = self._register()
        response = self.client.post('/api/qrcode/generate?format=gif', headers=headers)
        self.assertEqual(response.status_code, 400)

    def test_generate_encode_failure(self):
        _, headers = self._register()
        self.encoder.error = RuntimeError('boom')

        response = self.client.post('/api/qrcode/generate', headers=headers)

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()['detail'], 'Error generating QR code')

    # ── public lookup ─────────────────────────────────────────

    def test_public_lookup(self):
        user_id, _ = self._register()

        response = self.client.get(f'/api/qrcode/user/{user_id}')

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertEqual(data['user'], {'name': 'Ann', 'email': 'ann@x.com', 'membership': 'Basic'})
        self.assertTrue(data['avatar'].startswith('https://ui-avatars.com/api/?name=Ann'))
        self.assertEqual(self.encoder.calls[-1][0], '{"name":"Ann","email":"ann@x.com","membership":"Basic"}')

    def test_public_lookup_is_deterministic(self):
        user_id, _ = self._register()

        first = self.client.get(f'/api/qrcode/user/{user_id}').json()['qrCode']
        second = self.client.get(f'/api/qrcode/user/{user_id}').json()['qrCode']

        self.assertEqual(first, second)

    def test_public_lookup_missing(self):
        response = self.client.get('/api/qrcode/user/does-not-exist')

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['detail'], 'User not found')

    # ── end-to-end scenario ───────────────────────────────────

    def test_register_login_lookup_scenario(self):
        ann = {'name': 'Ann', 'email': 'ann@x.com', 'password': 'secret123'}

        registered = self.client.post('/api/auth/register', json=ann)
        self.assertEqual(registered.status_code, 201)
        self.assertEqual(registered.json()['user']['email'], 'ann@x.com')
        self.assertTrue(registered.json()['token'])

        logged_in = self.client.post('/api/auth/login', json={'email': 'ann@x.com', 'password': 'secret123'})
        self.assertEqual(logged_in.status_code, 200)
        self.assertTrue(logged_in.json()['token'])
        self.assertEqual(logged_in.json()['user']['id'], registered.json()['user']['id'])

        rejected = self.client.post('/api/auth/login', json={'email': 'ann@x.com', 'password': 'wrong'})
        self.assertEqual(rejected.status_code, 400)

        user_id = registered.json()['user']['id']
        lookup = self.client.get(f'/api/qrcode/user/{user_id}')
        self.assertEqual(lookup.status_code, 200)
        self.assertEqual(lookup.json()['user'], {'name': 'Ann', 'email': 'ann@x.com', 'membership': 'Basic'})


if __name__ == '__main__':
    unittest.main()
