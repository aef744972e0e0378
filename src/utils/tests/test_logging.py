"""Tests for the JSON log formatter."""

import json
import logging
import sys
import unittest
from datetime import datetime, timezone

from utils.logging import JSONFormatter


def _record(msg: str, extra: dict | None = None, exc_info=None) -> logging.LogRecord:
    logger = logging.getLogger('levelup.test')
    return logger.makeRecord('levelup.test', logging.INFO, __file__, 1, msg, (), exc_info, extra=extra)


class TestJSONFormatter(unittest.TestCase):

    def test_basic_fields(self):
        line = json.loads(JSONFormatter().format(_record('User logged in')))

        self.assertEqual(line['level'], 'INFO')
        self.assertEqual(line['logger'], 'levelup.test')
        self.assertEqual(line['message'], 'User logged in')
        self.assertTrue(line['timestamp'].endswith('Z'))

    def test_extra_fields_are_included(self):
        when = datetime(2026, 1, 1, tzinfo=timezone.utc)

        line = json.loads(JSONFormatter().format(_record('Mock test submitted', {'userId': '17', 'at': when})))

        self.assertEqual(line['userId'], '17')
        self.assertEqual(line['at'], str(when))
        self.assertNotIn('args', line)

    def test_exception(self):
        try:
            raise ValueError('boom')
        except ValueError:
            record = _record('failed', exc_info=sys.exc_info())

        line = json.loads(JSONFormatter().format(record))

        self.assertIn('ValueError: boom', line['exception'])


if __name__ == '__main__':
    unittest.main()
