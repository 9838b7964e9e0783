import json
import tempfile
import unittest
from pathlib import Path

from src.main import CONFIG_PATH, load_config
from src.models import HiderConfig


class HiderConfigTests(unittest.TestCase):
    def test_from_empty_dict_uses_defaults(self) -> None:
        cfg = HiderConfig.from_dict({})
        self.assertEqual(cfg, HiderConfig())
        self.assertEqual(cfg.gcd_threshold, 2.0)
        self.assertEqual(cfg.near_zero_threshold, 0.1)
        self.assertTrue(cfg.hide_edge)
        self.assertEqual(cfg.poll_interval_ms, 500)

    def test_round_trip(self) -> None:
        cfg = HiderConfig(gcd_threshold=1.75, hide_edge=False, poll_interval_ms=250, debug=True)
        self.assertEqual(HiderConfig.from_dict(cfg.to_dict()), cfg)

    def test_poll_interval_is_clamped_positive(self) -> None:
        cfg = HiderConfig.from_dict({"scanner": {"poll_interval_ms": -20}})
        self.assertEqual(cfg.poll_interval_ms, 1)

    def test_shipped_default_config_matches_defaults(self) -> None:
        self.assertEqual(load_config(CONFIG_PATH), HiderConfig())

    def test_load_config_falls_back_on_missing_or_broken_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            missing = Path(tmp) / "missing.json"
            self.assertEqual(load_config(missing), HiderConfig())

            broken = Path(tmp) / "broken.json"
            broken.write_text("{not json")
            self.assertEqual(load_config(broken), HiderConfig())

            custom = Path(tmp) / "custom.json"
            custom.write_text(json.dumps({"display": {"hide_edge": False}}))
            self.assertFalse(load_config(custom).hide_edge)


if __name__ == "__main__":
    unittest.main()
