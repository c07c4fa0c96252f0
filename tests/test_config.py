import os
import tempfile
import unittest

from fraction64 import config
from fraction64.config import Settings, configure, get_settings, load_settings, settings


class SettingsTests(unittest.TestCase):
    def tearDown(self):
        configure(overflow="wrap", float_precision=None)

    def test_defaults(self):
        current = get_settings()
        self.assertEqual(current.overflow, "wrap")
        self.assertIsNone(current.float_precision)

    def test_validation(self):
        with self.assertRaises(ValueError):
            Settings(overflow="saturate")
        with self.assertRaises(ValueError):
            Settings(float_precision=-1)
        with self.assertRaises(ValueError):
            Settings(float_precision=True)

    def test_configure_returns_previous(self):
        previous = configure(overflow="raise")
        self.assertEqual(previous.overflow, "wrap")
        self.assertEqual(get_settings().overflow, "raise")

    def test_configure_rejects_unknown_keys(self):
        with self.assertRaises(ValueError):
            configure(rounding="half-even")

    def test_context_manager_restores(self):
        with settings(overflow="raise", float_precision=3) as active:
            self.assertEqual(active.overflow, "raise")
            self.assertEqual(get_settings().float_precision, 3)
        self.assertEqual(get_settings(), Settings())

    def test_context_manager_restores_after_error(self):
        with self.assertRaises(RuntimeError):
            with settings(overflow="raise"):
                raise RuntimeError("boom")
        self.assertEqual(get_settings().overflow, "wrap")


class LoadSettingsTests(unittest.TestCase):
    def tearDown(self):
        configure(overflow="wrap", float_precision=None)

    def _write(self, text):
        handle = tempfile.NamedTemporaryFile("w", suffix=".toml", delete=False)
        with handle:
            handle.write(text)
        self.addCleanup(os.unlink, handle.name)
        return handle.name

    def test_load_and_apply(self):
        path = self._write('[fraction64]\noverflow = "raise"\nfloat_precision = 6\n')
        loaded = load_settings(path)
        self.assertEqual(loaded, Settings(overflow="raise", float_precision=6))
        self.assertEqual(config.get_settings(), loaded)

    def test_load_without_apply(self):
        path = self._write('[fraction64]\nfloat_precision = 4\n')
        loaded = load_settings(path, apply=False)
        self.assertEqual(loaded.float_precision, 4)
        self.assertIsNone(get_settings().float_precision)

    def test_missing_table_gives_defaults(self):
        path = self._write('[other]\nvalue = 1\n')
        self.assertEqual(load_settings(path), Settings())

    def test_unknown_key_rejected(self):
        path = self._write('[fraction64]\nmode = "fast"\n')
        with self.assertRaises(ValueError):
            load_settings(path)


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()
