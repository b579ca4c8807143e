"""
main_asyncio.py — Application entry point for the stair light engine
----------------------------------------------------------------------

Responsible for:
- loading config.yaml and configuring the logger
- building the PinMapper (brightness sink) and the AnimationService
- running one named animation (or the demo show) on the asyncio loop
- blacking out the stairs on Ctrl+C or fatal errors

Usage:
    python main_asyncio.py               # first animation in config/animations
    python main_asyncio.py welcome       # animation by file stem
    python main_asyncio.py --demo        # looping demo show
"""

import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from animations.effects import create_demo_animation
from hardware.pwm.factory import PinMapperFactory
from managers import ConfigManager
from models.enums import LogCategory
from models.errors import ConfigurationError
from services import AnimationService
from utils.logger import get_logger, configure_logger

log = get_logger().for_category(LogCategory.SYSTEM)

SRC_DIR = Path(__file__).parent


def fix_console_encoding() -> None:
    """UTF-8 output for the log symbols (important for Raspberry Pi consoles)."""
    for stream in (sys.stdout, sys.stderr):
        if hasattr(stream, "reconfigure") and stream.encoding.upper() != "UTF-8":
            stream.reconfigure(encoding="utf-8")  # type: ignore


async def main(argv: Optional[List[str]] = None) -> int:
    """Main async entry point (wiring and run until the animation stops)."""
    args = list(sys.argv[1:] if argv is None else argv)

    config = ConfigManager().load()
    configure_logger(config.logging.level, config.logging.use_colors)
    log.info("Starting stair light engine...")

    mapper = PinMapperFactory.create(config)

    if "--demo" in args:
        animation = create_demo_animation(
            mapper, tick_interval_ms=config.engine.tick_interval_ms, easing=config.engine.easing
        )
        name = "demo"
    else:
        animations_path = Path(config.animations_path)
        if not animations_path.is_absolute():
            animations_path = SRC_DIR / animations_path

        service = AnimationService(
            animations_path,
            mapper,
            tick_interval_ms=config.engine.tick_interval_ms,
            default_easing=config.engine.easing,
            loop_infinite=config.engine.loop_infinite or None,
        )
        available = service.get_animations_list()
        if not available:
            log.error("No animations found", path=str(animations_path))
            return 1

        name = args[0] if args else available[0]["key"]
        try:
            animation = service.get_animation(name)
        except KeyError:
            log.error(f"Unknown animation '{name}'", available=", ".join(a["key"] for a in available))
            return 1

    log.info(f"Running animation '{name}'")
    try:
        animation.start()
        await animation.wait_until_stopped()
    except asyncio.CancelledError:
        log.info("Cancelled, blacking out")
        raise
    finally:
        animation.stop()

    log.info("Animation finished", name=name)
    return 0


if __name__ == "__main__":
    fix_console_encoding()
    try:
        sys.exit(asyncio.run(main()))
    except KeyboardInterrupt:
        log.info("Interrupted by user")
    except ConfigurationError as ex:
        log.error("Invalid configuration", error=str(ex), field=ex.field)
        sys.exit(2)
