"""
PinMapper - logical channel to PWM driver pin mapping.

Stairs are wired to one or more PWM controllers; the PinMapper lets
animations address steps by a logical channel number in the order they
appear on the stairs, independent of which driver/pin they are wired to.

Implements IBrightnessSink, so it can be handed to LedstripAnimation and
to the primitives that snapshot current brightness.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from hardware.pwm.brightness_sink import IBrightnessSink, clamp_brightness
from hardware.pwm.pwm_driver import IPwmDriver
from models.errors import SinkError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)


@dataclass(frozen=True)
class MappedPin:
    """Physical target of one logical channel"""
    driver: str
    pin: int
    step: Optional[int] = None


class PinMapper(IBrightnessSink):
    """
    Brightness sink backed by named PWM drivers.

    Example:
        mapper = PinMapper()
        mapper.add_driver("bottom", VirtualPwmDriver(0x40))
        mapper.set_pin_mapping({0: MappedPin("bottom", 0, step=0)})
        mapper.set_brightness(0, 2048)
    """

    def __init__(self):
        self.drivers: Dict[str, IPwmDriver] = {}
        self.pin_mapping: Dict[int, MappedPin] = {}
        self.brightnesses: Dict[int, int] = {}

    # ==================== Drivers ====================

    def add_driver(self, name: str, driver: IPwmDriver) -> "PinMapper":
        self.drivers[name] = driver
        return self

    def get_driver(self, name: str) -> IPwmDriver:
        try:
            return self.drivers[name]
        except KeyError:
            raise SinkError(f"Could not find PWM driver by name {name!r}. Did you initialize it properly?") from None

    def get_driver_by_address(self, address: int) -> IPwmDriver:
        for driver in self.drivers.values():
            if driver.address == address:
                return driver
        raise SinkError(f"Could not find PWM driver by address {hex(address)}. Did you initialize it properly?")

    def set_pwm_frequency(self, frequency: float) -> "PinMapper":
        for driver in self.drivers.values():
            driver.set_pwm_frequency(frequency)
        return self

    # ==================== Mapping ====================

    def set_pin_mapping(self, mapping: Dict[int, MappedPin]) -> "PinMapper":
        self.pin_mapping = dict(mapping)
        return self

    def get_mapped_pin(self, channel: int) -> MappedPin:
        try:
            return self.pin_mapping[channel]
        except KeyError:
            raise SinkError(f"Channel {channel} is unknown in current pin mapping") from None

    def unmap(self, driver: str, pin: int) -> Optional[int]:
        """Reverse lookup: logical channel wired to driver/pin, or None"""
        for channel, mapped in self.pin_mapping.items():
            if mapped.driver == driver and mapped.pin == pin:
                return channel
        return None

    def channels(self) -> List[int]:
        return sorted(self.pin_mapping)

    def steps(self) -> List[int]:
        """Channels in stair order: by step number, channels without a step last"""
        return sorted(
            self.pin_mapping,
            key=lambda channel: (self.pin_mapping[channel].step is None, self.pin_mapping[channel].step or 0, channel),
        )

    def count(self) -> int:
        return len(self.pin_mapping)

    # ==================== Brightness ====================

    def get_brightness(self, channel: int) -> int:
        return self.brightnesses.get(channel, 0)

    def set_brightness(self, channel: int, value: int) -> None:
        """
        Write brightness to the mapped driver pin.

        Clamps to 0..4095 and only touches the driver when the value changes.

        Raises:
            SinkError: unknown channel/driver or driver write failure
        """
        value = clamp_brightness(value)
        mapped = self.get_mapped_pin(channel)

        if self.brightnesses.get(channel) == value:
            return

        try:
            self.get_driver(mapped.driver).set_pwm(mapped.pin, 0, value)
        except SinkError:
            raise
        except Exception as ex:
            log.error("PWM write failed", channel=channel, driver=mapped.driver, pin=mapped.pin, error=str(ex))
            raise SinkError(f"Error setting brightness {value} on {mapped.driver}:{mapped.pin}") from ex

        self.brightnesses[channel] = value

    def set_all_brightness(self, value: int, channels: Optional[Iterable[int]] = None) -> "PinMapper":
        for channel in (channels if channels is not None else self.channels()):
            self.set_brightness(channel, value)
        return self
