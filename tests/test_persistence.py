"""Tests for counter persistence and settings.

Covers: sc.core.config, sc.core.storage
"""

import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch


class _FailingStorage:
    """Storage slot whose writes always fail, like a full disk or a read-only data folder."""

    def __init__(self, initial=None):
        self.initial = initial
        self.writes = 0

    def get_item(self, key):
        return self.initial

    def set_item(self, key, value):
        self.writes += 1
        raise OSError("No space left on device")


class _UnreadableStorage:
    def get_item(self, key):
        raise PermissionError("Access is denied")

    def set_item(self, key, value):
        pass


# ──────────────────────────────────────────────────────────────────────────
# storage.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestLocalStorage(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_missing_key_returns_none(self):
        from sc.core.storage import LocalStorage
        self.assertIsNone(LocalStorage(self.tmpdir).get_item("nothing:here"))

    def test_set_then_get(self):
        from sc.core.storage import LocalStorage
        storage = LocalStorage(self.tmpdir)
        storage.set_item("scorecounter:v1", '{"a": 1}')
        self.assertEqual(storage.get_item("scorecounter:v1"), '{"a": 1}')

    def test_key_maps_to_safe_filename(self):
        from sc.core.storage import LocalStorage
        storage = LocalStorage(self.tmpdir)
        storage.set_item("scorecounter:v1", "x")
        self.assertEqual(os.listdir(self.tmpdir), ["scorecounter_v1.json"])

    def test_overwrite_leaves_no_temp_files(self):
        from sc.core.storage import LocalStorage
        storage = LocalStorage(self.tmpdir)
        storage.set_item("k", "one")
        storage.set_item("k", "two")
        self.assertEqual(storage.get_item("k"), "two")
        self.assertEqual(os.listdir(self.tmpdir), ["k.json"])

    def test_creates_directory(self):
        from sc.core.storage import LocalStorage
        nested = Path(self.tmpdir) / "a" / "b"
        LocalStorage(nested).set_item("k", "v")
        self.assertTrue((nested / "k.json").exists())

    def test_unusable_key_rejected(self):
        from sc.util import key_to_filename
        with self.assertRaises(ValueError):
            key_to_filename("...")


# ──────────────────────────────────────────────────────────────────────────
# config.py envelope / adapter tests
# ──────────────────────────────────────────────────────────────────────────

class TestPersistenceAdapter(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        from sc.core.storage import LocalStorage
        self.storage = LocalStorage(self.tmpdir)

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def _sample(self):
        from sc.core.counter import Counter
        return [
            Counter(id="a", name="Ann", score=3, color="#0f172a"),
            Counter(id="b", name="", score=-12, color="#abcdef"),
        ]

    def _write_raw(self, payload):
        from sc.core.config import STORAGE_KEY
        text = payload if isinstance(payload, str) else json.dumps(payload)
        self.storage.set_item(STORAGE_KEY, text)

    def test_missing_slot_loads_empty(self):
        from sc.core.config import PersistenceAdapter
        adapter = PersistenceAdapter(self.storage)
        self.assertEqual(adapter.load(), [])
        self.assertTrue(adapter.loaded)

    def test_save_and_load_roundtrip(self):
        from sc.core.config import PersistenceAdapter
        writer = PersistenceAdapter(self.storage)
        writer.load()
        self.assertTrue(writer.save(self._sample()))

        reader = PersistenceAdapter(self.storage)
        self.assertEqual(reader.load(), self._sample())

    def test_written_layout(self):
        from sc.core.config import PersistenceAdapter, STORAGE_KEY
        adapter = PersistenceAdapter(self.storage)
        adapter.load()
        adapter.save(self._sample())
        payload = json.loads(self.storage.get_item(STORAGE_KEY))
        self.assertEqual(payload["schema_version"], 1)
        self.assertEqual(payload["counters"][1],
                         {"id": "b", "name": "", "score": -12, "color": "#abcdef"})

    def test_corrupt_json_loads_empty(self):
        from sc.core.config import PersistenceAdapter
        self._write_raw("{invalid json!!")
        self.assertEqual(PersistenceAdapter(self.storage).load(), [])

    def test_wrong_shapes_load_empty(self):
        from sc.core.config import PersistenceAdapter
        bad_payloads = [
            [],
            {"counters": []},
            {"schema_version": "1", "counters": []},
            {"schema_version": 1},
            {"schema_version": 1, "counters": {"a": 1}},
            {"schema_version": 1, "counters": [{"id": "a", "name": "x", "score": "7", "color": "#fff"}]},
        ]
        for payload in bad_payloads:
            self._write_raw(payload)
            self.assertEqual(PersistenceAdapter(self.storage).load(), [], msg=repr(payload))

    def test_other_schema_version_passes_through(self):
        from sc.core.config import PersistenceAdapter
        self._write_raw({
            "schema_version": 7,
            "counters": [{"id": "a", "name": "Ann", "score": 3, "color": "#0f172a"}],
        })
        counters = PersistenceAdapter(self.storage).load()
        self.assertEqual([c.id for c in counters], ["a"])
        self.assertEqual(counters[0].score, 3)

    def test_unreadable_storage_loads_empty(self):
        from sc.core.config import PersistenceAdapter
        adapter = PersistenceAdapter(_UnreadableStorage())
        self.assertEqual(adapter.load(), [])
        self.assertTrue(adapter.loaded)

    def test_no_write_before_load(self):
        from sc.core.config import PersistenceAdapter, STORAGE_KEY
        self._write_raw({"schema_version": 1, "counters": []})
        adapter = PersistenceAdapter(self.storage)
        self.assertFalse(adapter.save(self._sample()))
        self.assertEqual(json.loads(self.storage.get_item(STORAGE_KEY))["counters"], [])

    def test_write_failure_is_not_fatal(self):
        from sc.core.config import PersistenceAdapter
        storage = _FailingStorage()
        adapter = PersistenceAdapter(storage)
        adapter.load()
        self.assertFalse(adapter.save(self._sample()))
        self.assertEqual(storage.writes, 1)


# ──────────────────────────────────────────────────────────────────────────
# config.py settings tests
# ──────────────────────────────────────────────────────────────────────────

class TestSettings(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self._tmppath = Path(self.tmpdir)

        # Monkey-patch the settings path to use temp dir
        from sc.core import config
        self._orig_settings_path = config.SETTINGS_PATH
        config.SETTINGS_PATH = self._tmppath / "settings.json"

    def tearDown(self):
        from sc.core import config
        config.SETTINGS_PATH = self._orig_settings_path
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_missing_file_returns_defaults(self):
        from sc.core import config
        settings = config.load_settings()
        self.assertEqual(settings, config.default_settings())
        self.assertEqual(settings["long_press_ms"], 520)
        self.assertEqual(settings["min_row_height_px"], 96)

    def test_save_and_load_roundtrip(self):
        from sc.core import config
        settings = config.default_settings()
        settings["long_press_ms"] = 400
        settings["always_on_top"] = True
        config.save_settings(settings)
        self.assertEqual(config.load_settings(), settings)

    def test_fills_missing_and_wrong_typed_keys(self):
        from sc.core import config
        with open(config.SETTINGS_PATH, "w") as f:
            json.dump({"long_press_ms": 300, "always_on_top": "yes", "min_row_height_px": True}, f)
        settings = config.load_settings()
        self.assertEqual(settings["long_press_ms"], 300)
        self.assertFalse(settings["always_on_top"])
        self.assertEqual(settings["min_row_height_px"], 96)
        self.assertEqual(settings["window_width"], 420)

    def test_corrupt_file_returns_defaults(self):
        from sc.core import config
        with open(config.SETTINGS_PATH, "w") as f:
            f.write("{nope")
        self.assertEqual(config.load_settings(), config.default_settings())

    def test_non_object_returns_defaults(self):
        from sc.core import config
        with open(config.SETTINGS_PATH, "w") as f:
            json.dump([1, 2, 3], f)
        self.assertEqual(config.load_settings(), config.default_settings())

    def test_defaults_are_fresh_copies(self):
        from sc.core import config
        a = config.default_settings()
        a["long_press_ms"] = 1
        self.assertEqual(config.default_settings()["long_press_ms"], 520)


# ──────────────────────────────────────────────────────────────────────────
# setup.py tests
# ──────────────────────────────────────────────────────────────────────────

class TestDataDir(unittest.TestCase):

    def test_home_override_wins(self):
        from sc.common.setup import _resolve_data_dir
        with patch.dict(os.environ, {"SCORECOUNTER_HOME": "/tmp/sc-home"}):
            self.assertEqual(_resolve_data_dir(), Path("/tmp/sc-home"))

    def test_xdg_data_home_on_posix(self):
        from sc.common import setup
        with patch.object(setup.sys, "platform", "linux"), \
                patch.dict(os.environ, {"SCORECOUNTER_HOME": "", "XDG_DATA_HOME": "/tmp/xdg"}):
            self.assertEqual(setup._resolve_data_dir(), Path("/tmp/xdg") / "ScoreCounter")

    def test_windows_requires_appdata(self):
        from sc.common import setup
        env = {k: v for k, v in os.environ.items() if k not in ("APPDATA", "SCORECOUNTER_HOME")}
        with patch.object(setup.sys, "platform", "win32"), patch.dict(os.environ, env, clear=True):
            with self.assertRaises(RuntimeError):
                setup._resolve_data_dir()


if __name__ == "__main__":
    unittest.main()
