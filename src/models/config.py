"""
Configuration models

Immutable configuration parsed from config.yaml by ConfigManager.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from models.enums import LogLevel
from models.errors import ConfigurationError


@dataclass(frozen=True)
class LoggingConfig:
    level: LogLevel = LogLevel.INFO
    use_colors: bool = True


@dataclass(frozen=True)
class EngineConfig:
    """
    Runner defaults.

    easing applies to animations whose file names none; loop_infinite=True
    forces every animation to loop.
    """
    easing: str = "linear"
    loop_infinite: bool = False
    tick_interval_ms: float = 0.0


@dataclass(frozen=True)
class DriverConfig:
    """One PWM controller (PCA9685-style, 16 pins)"""
    name: str
    address: int = 0x40
    pins: int = 16
    frequency: float = 1000.0


@dataclass(frozen=True)
class PinMappingConfig:
    """Logical channel → driver pin. `step` is the stair step the led lights."""
    channel: int
    driver: str
    pin: int
    step: Optional[int] = None


@dataclass(frozen=True)
class AppConfig:
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    drivers: List[DriverConfig] = field(default_factory=list)
    pin_mapping: List[PinMappingConfig] = field(default_factory=list)
    animations_path: str = "config/animations"

    def channels(self) -> List[int]:
        return [m.channel for m in self.pin_mapping]


def parse_address(value: Any) -> int:
    """Accept 64, "64" or "0x40"."""
    if isinstance(value, int):
        return value
    try:
        return int(str(value), 0)
    except ValueError:
        raise ConfigurationError(f"Invalid driver address: {value!r}", field="address") from None


def parse_pin_mapping(raw: Any) -> List[PinMappingConfig]:
    """
    Accept either a list of {channel, driver, pin, step} entries or a dict
    keyed by channel: {0: {driver: bottom, pin: 0}}.
    """
    entries: List[Dict[str, Any]] = []
    if isinstance(raw, dict):
        for channel, entry in raw.items():
            entries.append({"channel": int(channel), **entry})
    elif isinstance(raw, list):
        entries = list(raw)
    elif raw is not None:
        raise ConfigurationError("pin_mapping must be a list or mapping", field="pin_mapping")

    mapping = []
    for entry in entries:
        try:
            mapping.append(PinMappingConfig(
                channel=int(entry["channel"]),
                driver=str(entry["driver"]),
                pin=int(entry["pin"]),
                step=int(entry["step"]) if entry.get("step") is not None else None,
            ))
        except (KeyError, TypeError, ValueError) as ex:
            raise ConfigurationError(f"Invalid pin_mapping entry {entry!r}: {ex}", field="pin_mapping") from ex
    return mapping
