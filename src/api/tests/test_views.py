"""Tests for the HTML client views."""

import unittest

from fastapi.testclient import TestClient

from api.main import app


class TestViews(unittest.TestCase):

    def setUp(self):
        self.client = TestClient(app)

    def test_root_redirects_to_profile(self):
        response = self.client.get('/', follow_redirects=False)

        self.assertIn(response.status_code, (302, 307))
        self.assertEqual(response.headers['location'], '/profile')

    def test_pages_render_html(self):
        for path, marker in [
            ('/login', 'id="register"'),
            ('/profile', 'id="avatar-form"'),
            ('/qrcode', 'id="share"'),
            ('/user/abc', '/qrcode/user/'),
        ]:
            with self.subTest(path=path):
                response = self.client.get(path)
                self.assertEqual(response.status_code, 200)
                self.assertTrue(response.headers['content-type'].startswith('text/html'))
                self.assertIn(marker, response.text)

    def test_share_falls_back_in_order(self):
        text = self.client.get('/qrcode').text

        self.assertLess(text.index('navigator.share'), text.index('navigator.clipboard'))
        self.assertLess(text.index('navigator.clipboard'), text.index('window.open'))

    def test_user_id_cannot_break_out_of_script(self):
        response = self.client.get('/user/%3Cscript%3Ealert(1)')

        self.assertEqual(response.status_code, 200)
        self.assertNotIn('<script>alert(1)', response.text)

    def test_views_hidden_from_openapi(self):
        paths = self.client.get('/openapi.json').json()['paths']

        self.assertNotIn('/login', paths)
        self.assertIn('/api/auth/login', paths)


if __name__ == '__main__':
    unittest.main()
