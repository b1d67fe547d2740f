"""
Tests for the structured error log.
"""

import os
import sys
import unittest

# Add the parent directory to Python path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from s3bench.common.error_sink import ErrorLog
from s3bench.configuration import MAX_ERROR_RECORDS
from s3bench.systems.errors import (
    MissingBodyError,
    StoreError,
    StoreOperationError,
    TransportDispatchError,
)


class TestErrorLog(unittest.TestCase):

    def test_counts_by_operation_and_type(self):
        errors = ErrorLog()
        with self.assertLogs('s3bench.common.error_sink', level='WARNING'):
            errors.record("put", "run/put_1", TransportDispatchError("reset"))
            errors.record("get", "run/a", MissingBodyError("no body"))
            errors.record("get", "run/b", StoreOperationError("denied", code="AccessDenied"))

        self.assertEqual(len(errors), 3)
        self.assertEqual(errors.count("get"), 2)
        self.assertEqual(errors.count(error_type=TransportDispatchError), 1)
        self.assertEqual(errors.count("get", StoreError), 2)
        self.assertEqual(errors.count("list"), 0)

    def test_transient_flag(self):
        errors = ErrorLog()
        with self.assertLogs('s3bench.common.error_sink', level='WARNING'):
            transient = errors.record("list", "run", TransportDispatchError("reset"))
            permanent = errors.record("list", "run", StoreOperationError("denied"))

        self.assertTrue(transient.transient)
        self.assertFalse(permanent.transient)

    def test_retained_records_are_bounded(self):
        errors = ErrorLog(max_records=5)
        with self.assertLogs('s3bench.common.error_sink', level='WARNING'):
            for i in range(12):
                errors.record("list", f"run/{i}", TransportDispatchError("reset"))

        self.assertEqual(len(errors.records), 5)
        self.assertEqual(errors.records[0].target, "run/7")
        self.assertEqual(len(errors), 12)
        self.assertEqual(errors.count("list", TransportDispatchError), 12)

    def test_default_bound(self):
        self.assertEqual(ErrorLog().records.maxlen, MAX_ERROR_RECORDS)


if __name__ == '__main__':
    unittest.main()
