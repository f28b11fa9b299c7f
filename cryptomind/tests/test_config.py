"""Unit tests for environment-driven desk settings."""

import os
import unittest
from unittest import mock

from pydantic import ValidationError

from cryptomind.config import DeskSettings


class DeskSettingsTests(unittest.TestCase):
    def test_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = DeskSettings(_env_file=None)

        self.assertEqual(settings.seed_balance, 50000.0)
        self.assertEqual(settings.autotrade_period_seconds, 20.0)
        self.assertEqual(settings.autotrade_top_n, 20)
        self.assertEqual(settings.dust_threshold, 1e-6)
        self.assertIsNone(settings.random_seed)

    def test_environment_overrides(self) -> None:
        env = {"CRYPTOMIND_SEED_BALANCE": "1000", "CRYPTOMIND_RANDOM_SEED": "7"}
        with mock.patch.dict(os.environ, env, clear=True):
            settings = DeskSettings(_env_file=None)

        self.assertEqual(settings.seed_balance, 1000.0)
        self.assertEqual(settings.random_seed, 7)

    def test_invalid_values_are_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            DeskSettings(_env_file=None, seed_balance=0)
        with self.assertRaises(ValidationError):
            DeskSettings(_env_file=None, min_confidence=101)


if __name__ == "__main__":
    unittest.main()
