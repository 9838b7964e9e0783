import unittest

from src.engine import GcdClassifier
from src.hooks import FrameHookManager
from src.host import CooldownIcon
from src.host.sandbox import DurationHandle, SandboxHost, SpellState
from src.models import HiderConfig, Redacted

from qt_helpers import ensure_app


class _ExplodingIcon(CooldownIcon):
    def get_spell_id(self):
        raise RuntimeError("no spell")


class _RedactedNameHost(SandboxHost):
    def get_spell_name(self, spell_id):
        return Redacted("Strike")


class FrameHookTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        ensure_app()

    def setUp(self) -> None:
        self.host = SandboxHost()
        self.host.set_gcd(1.5)
        self.host.add_spell(100, SpellState(name="Strike", duration=1.5, on_gcd=True))
        self.host.add_spell(200, SpellState(name="Big Cooldown", duration=90.0))
        self.host.add_spell(
            400, SpellState(name="Triple", duration=1.0, max_charges=3, charges=1, recharge=12.0)
        )
        self.config = HiderConfig()
        self.classifier = GcdClassifier(self.host, self.config)
        self.hooks = FrameHookManager(self.classifier, self.config, self.host)

    def _hooked_icon(self, spell_id, cls=CooldownIcon) -> CooldownIcon:
        icon = cls(spell_id, f"Icon{spell_id}")
        self.assertTrue(self.hooks.hook_icon(icon))
        return icon

    def test_hooks_install_once(self) -> None:
        icon = self._hooked_icon(100)
        self.assertFalse(self.hooks.hook_icon(icon))
        self.assertTrue(self.hooks.is_hooked(icon.cooldown))
        self.assertEqual(self.hooks.hooked_count, 1)

    def test_object_without_cooldown_frame_is_not_hooked(self) -> None:
        self.assertFalse(self.hooks.hook_icon(object()))
        self.assertEqual(self.hooks.hooked_count, 0)

    def test_gcd_update_suppresses_swipe_and_edge(self) -> None:
        icon = self._hooked_icon(100)
        icon.cooldown.set_cooldown(0.0, 1.5)
        self.assertFalse(icon.cooldown.draw_swipe)
        self.assertFalse(icon.cooldown.draw_edge)

    def test_real_cooldown_keeps_swipe(self) -> None:
        icon = self._hooked_icon(200)
        icon.cooldown.set_cooldown(0.0, 90.0)
        self.assertTrue(icon.cooldown.draw_swipe)
        self.assertTrue(icon.cooldown.draw_edge)

    def test_edge_left_alone_when_edge_hiding_disabled(self) -> None:
        config = HiderConfig(hide_edge=False)
        hooks = FrameHookManager(GcdClassifier(self.host, config), config, self.host)
        icon = CooldownIcon(100, "Strike")
        hooks.hook_icon(icon)
        icon.cooldown.set_cooldown(0.0, 1.5)
        icon.cooldown.set_draw_edge(True)
        self.assertFalse(icon.cooldown.draw_swipe)
        self.assertTrue(icon.cooldown.draw_edge)

    def test_host_re_enable_is_corrected_synchronously(self) -> None:
        icon = self._hooked_icon(100)
        self.host.refresh_icon(icon)
        self.assertFalse(icon.cooldown.draw_swipe)
        self.assertFalse(icon.cooldown.draw_edge)
        icon.cooldown.set_draw_swipe(True)
        self.assertFalse(icon.cooldown.draw_swipe)

    def test_re_enable_of_real_cooldown_is_allowed(self) -> None:
        icon = self._hooked_icon(200)
        icon.cooldown.set_cooldown(0.0, 90.0)
        icon.cooldown.set_draw_swipe(False)
        icon.cooldown.set_draw_swipe(True)
        self.assertTrue(icon.cooldown.draw_swipe)

    def test_forced_write_does_not_recurse(self) -> None:
        icon = self._hooked_icon(100)
        writes = []
        icon.cooldown.draw_swipe_changed.connect(writes.append)
        icon.cooldown.set_cooldown(0.0, 1.5)
        self.assertEqual(writes, [False])
        self.assertFalse(icon.cooldown.suppressing)

    def test_apply_suppression_is_idempotent(self) -> None:
        icon = self._hooked_icon(100)
        self.hooks.apply_suppression(icon.cooldown)
        self.hooks.apply_suppression(icon.cooldown)
        self.assertFalse(icon.cooldown.draw_swipe)
        self.assertFalse(icon.cooldown.draw_edge)
        self.assertFalse(icon.cooldown.suppressing)

    def test_cooldown_set_from_charges_is_never_hidden(self) -> None:
        icon = self._hooked_icon(None)
        icon.was_set_from_charges = True
        icon.cooldown.set_cooldown(0.0, 1.5)
        self.assertTrue(icon.cooldown.draw_swipe)

    def test_recharging_spell_is_shown(self) -> None:
        icon = self._hooked_icon(400)
        icon.cooldown.set_cooldown(0.0, 1.0)
        self.assertTrue(icon.cooldown.draw_swipe)

    def test_duration_handle_updates_are_classified(self) -> None:
        short = self._hooked_icon(None)
        short.cooldown.set_cooldown_from_duration(DurationHandle(1.0))
        self.assertFalse(short.cooldown.draw_swipe)

        icon = CooldownIcon(None, "Long")
        self.hooks.hook_icon(icon)
        icon.cooldown.set_cooldown_from_duration(DurationHandle(30.0))
        self.assertTrue(icon.cooldown.draw_swipe)

    def test_failing_spell_lookup_does_not_escape(self) -> None:
        icon = self._hooked_icon(None, cls=_ExplodingIcon)
        icon.cooldown.set_cooldown(0.0, 1.5)
        self.assertFalse(icon.cooldown.draw_swipe)

    def test_flag_change_before_any_update_is_ignored(self) -> None:
        icon = self._hooked_icon(100)
        icon.cooldown.set_draw_swipe(True)
        self.assertTrue(icon.cooldown.draw_swipe)

    def test_debug_mode_logs_hidden_cooldowns(self) -> None:
        config = HiderConfig(debug=True)
        hooks = FrameHookManager(GcdClassifier(self.host, config), config, self.host)
        icon = CooldownIcon(100, "Strike")
        hooks.hook_icon(icon)
        with self.assertLogs("src.hooks.frame_hooks", level="DEBUG") as logs:
            icon.cooldown.set_cooldown(0.0, 1.5)
        self.assertTrue(any("HIDDEN - Strike" in line for line in logs.output))

    def test_debug_log_tolerates_redacted_spell_name(self) -> None:
        host = _RedactedNameHost()
        host.add_spell(100, SpellState(name="Strike", duration=1.5, on_gcd=True))
        config = HiderConfig(debug=True)
        hooks = FrameHookManager(GcdClassifier(host, config), config, host)
        icon = CooldownIcon(100, "Strike")
        hooks.hook_icon(icon)
        with self.assertLogs("src.hooks.frame_hooks", level="DEBUG") as logs:
            icon.cooldown.set_cooldown(0.0, 1.5)
        self.assertFalse(icon.cooldown.draw_swipe)
        self.assertTrue(any("HIDDEN - ? (id 100" in line for line in logs.output))


if __name__ == "__main__":
    unittest.main()
