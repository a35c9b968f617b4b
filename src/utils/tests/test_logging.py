"""Tests for the structured JSON log formatter."""

import json
import logging
import unittest

from utils.logging import JSONFormatter


def _record(msg='hello', **extra) -> logging.LogRecord:
    record = logging.LogRecord('auth', logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter(unittest.TestCase):

    def setUp(self):
        self.formatter = JSONFormatter()

    def test_basic_fields(self):
        data = json.loads(self.formatter.format(_record()))

        self.assertEqual(data['level'], 'INFO')
        self.assertEqual(data['logger'], 'auth')
        self.assertEqual(data['message'], 'hello')
        self.assertTrue(data['timestamp'].endswith('Z'))

    def test_extra_fields_included(self):
        data = json.loads(self.formatter.format(_record(userId='u1', email='ann@x.com')))

        self.assertEqual(data['userId'], 'u1')
        self.assertEqual(data['email'], 'ann@x.com')

    def test_sensitive_fields_redacted(self):
        output = self.formatter.format(_record(password='secret123', token='eyJhbGci', Authorization='Bearer x'))
        data = json.loads(output)

        self.assertEqual(data['password'], '[REDACTED]')
        self.assertEqual(data['token'], '[REDACTED]')
        self.assertEqual(data['Authorization'], '[REDACTED]')
        self.assertNotIn('secret123', output)

    def test_non_serializable_values(self):
        data = json.loads(self.formatter.format(_record(when=object())))
        self.assertIn('object', data['when'])


if __name__ == '__main__':
    unittest.main()
