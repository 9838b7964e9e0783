"""HideGCDSweep — Main entry point.

Wires together: sandbox host → viewer scanner → frame hooks → GCD classifier,
then replays a short play session on the Qt event loop and logs which sweeps
were suppressed.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from PyQt6.QtCore import QCoreApplication, QTimer

from src.addon import GcdSweepHider
from src.host import CooldownIcon, IconGroup, QtScheduler, ViewerContainer
from src.host.sandbox import SandboxHost, SpellState
from src.models import HiderConfig

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

CONFIG_PATH = Path(__file__).parent.parent / "config" / "default_config.json"


def load_config(path: Path = CONFIG_PATH) -> HiderConfig:
    """Load config from JSON, falling back to defaults."""
    if path.exists():
        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read config {path}: {e}; using defaults")
            return HiderConfig()
        logger.info(f"Loaded config from {path}")
        return HiderConfig.from_dict(data)
    logger.warning(f"Config not found at {path}, using defaults")
    return HiderConfig()


def build_sandbox() -> tuple[SandboxHost, list[CooldownIcon]]:
    """A small essential-cooldowns viewer: two direct icons and a nested row."""
    host = SandboxHost()
    host.set_gcd(1.5)
    host.add_spell(100, SpellState(name="Mortal Strike", duration=1.5, on_gcd=True))
    host.add_spell(200, SpellState(name="Bladestorm", duration=90.0))
    host.add_spell(
        300,
        SpellState(name="Charge", duration=1.5, on_gcd=True, max_charges=2, charges=2),
    )
    host.add_spell(
        400,
        SpellState(
            name="Overpower", duration=1.5, max_charges=2, charges=1, recharge=9.0
        ),
    )

    viewer = host.add_viewer(ViewerContainer("EssentialCooldownViewer"))
    icons = [
        viewer.add(CooldownIcon(100, "MortalStrike")),
        viewer.add(CooldownIcon(200, "Bladestorm")),
    ]
    row = viewer.add(IconGroup("Row2"))
    icons.append(row.add(CooldownIcon(300, "Charge")))
    icons.append(row.add(CooldownIcon(400, "Overpower")))
    return host, icons


def report(icons: list[CooldownIcon], label: str) -> None:
    for icon in icons:
        logger.info(
            f"[{label}] {icon.objectName():<13} swipe={'on ' if icon.cooldown.draw_swipe else 'off'}"
            f" edge={'on' if icon.cooldown.draw_edge else 'off'}"
        )


def main() -> None:
    config = load_config()
    if config.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    app = QCoreApplication(sys.argv)
    scheduler = QtScheduler()

    host, icons = build_sandbox()
    hider = GcdSweepHider(host, scheduler, config)
    hider.start()
    host.enter_world()

    def refresh_all(label: str) -> None:
        for icon in icons:
            host.refresh_icon(icon)
        report(icons, label)

    def enter_combat() -> None:
        host.enter_restricted()
        # Icon that only appears in combat; picked up by the poll
        late = CooldownIcon(200, "LateBladestorm")
        host.viewers()[0].add(late)
        icons.append(late)

    QTimer.singleShot(200, lambda: refresh_all("out of combat"))
    QTimer.singleShot(400, enter_combat)
    QTimer.singleShot(1200, lambda: refresh_all("in combat"))
    QTimer.singleShot(1400, host.leave_restricted)
    QTimer.singleShot(1600, app.quit)

    exit_code = app.exec()
    logger.info(f"Hooked {hider.hooks.hooked_count} frames, {len(hider.charges)} charge spells cached")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
