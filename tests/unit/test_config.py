import json
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

from watchface_core.config import (
    CONFIG_VERSION,
    MINUTE_HAND_LENGTH_MIN,
    AppConfig,
    load_config,
    save_config,
)


class ConfigTests(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "missing.json"
            cfg = load_config(path)
            self.assertIsInstance(cfg, AppConfig)
            self.assertEqual(cfg.style.color_style, "white")
            self.assertTrue(cfg.style.draw_hour_pips)
            self.assertEqual(cfg.display.interactive_frame_ms, 16)

    def test_unparseable_file_falls_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("{not json", encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())

    def test_save_and_reload(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            cfg = load_config(path)
            cfg.style.color_style = "blue"
            cfg.style.minute_hand_length_fraction = 0.3
            cfg.render.ambient = True
            save_config(cfg, path)
            reloaded = load_config(path)
            self.assertEqual(reloaded.style.color_style, "blue")
            self.assertAlmostEqual(reloaded.style.minute_hand_length_fraction, 0.3)
            self.assertTrue(reloaded.render.ambient)

    def test_normalizes_out_of_range_values(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            raw = {
                "config_version": 1,
                "style": {"color_style": "purple", "minute_hand_length_fraction": 0.01},
                "display": {"interactive_frame_ms": 0, "width": 2},
            }
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg.style.color_style, "white")
            self.assertEqual(cfg.style.minute_hand_length_fraction, MINUTE_HAND_LENGTH_MIN)
            self.assertEqual(cfg.display.interactive_frame_ms, 1)
            self.assertEqual(cfg.display.width, 16)

    def test_saved_file_carries_version_and_ignores_unknown_keys(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            save_config(AppConfig(), path)
            raw = json.loads(path.read_text(encoding="utf-8"))
            self.assertEqual(raw["config_version"], CONFIG_VERSION)

            raw["style"]["unknown"] = True
            raw["extra_section"] = {"a": 1}
            path.write_text(json.dumps(raw), encoding="utf-8")
            cfg = load_config(path)
            self.assertEqual(cfg, AppConfig())
            self.assertFalse(hasattr(cfg.style, "unknown"))

    def test_non_object_file_falls_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.json"
            path.write_text("[1, 2, 3]", encoding="utf-8")
            self.assertEqual(load_config(path), AppConfig())


if __name__ == "__main__":
    unittest.main()
