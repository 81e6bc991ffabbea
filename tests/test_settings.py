from __future__ import annotations

import unittest
from unittest.mock import patch

from domain.models import CANONICAL_FIELDS, AmountPolicy
from infrastructure.settings import LedgerSettings


class LedgerSettingsTests(unittest.TestCase):
    @patch.dict("os.environ", {}, clear=True)
    def test_defaults(self) -> None:
        settings = LedgerSettings.from_env()
        self.assertEqual(settings.base_url, "http://resttest.bench.co")
        self.assertEqual(settings.timeout_seconds, 30.0)
        self.assertIs(settings.amount_policy, AmountPolicy.DECIMAL)
        self.assertEqual(settings.dedup_fields, CANONICAL_FIELDS)
        self.assertIsNone(settings.max_pages)

    @patch.dict(
        "os.environ",
        {
            "LEDGER_API_BASE_URL": "http://ledger.test",
            "LEDGER_API_TIMEOUT_SECONDS": "2.5",
            "LEDGER_AMOUNT_POLICY": "TRUNCATE",
            "LEDGER_DEDUP_FIELDS": "posted_on, amount",
            "LEDGER_MAX_PAGES": "50",
        },
        clear=True,
    )
    def test_reads_environment(self) -> None:
        settings = LedgerSettings.from_env()
        self.assertEqual(settings.base_url, "http://ledger.test")
        self.assertEqual(settings.timeout_seconds, 2.5)
        self.assertIs(settings.amount_policy, AmountPolicy.TRUNCATE)
        self.assertEqual(settings.dedup_fields, ("posted_on", "amount"))
        self.assertEqual(settings.max_pages, 50)

    def test_invalid_values_raise_value_error(self) -> None:
        for env in (
            {"LEDGER_AMOUNT_POLICY": "round"},
            {"LEDGER_DEDUP_FIELDS": "posted_on,memo"},
            {"LEDGER_MAX_PAGES": "0"},
            {"LEDGER_API_TIMEOUT_SECONDS": "-1"},
        ):
            with self.subTest(env=env):
                with patch.dict("os.environ", env, clear=True):
                    with self.assertRaises(ValueError):
                        LedgerSettings.from_env()


if __name__ == "__main__":
    unittest.main()
