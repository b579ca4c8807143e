from typing import Dict, Protocol, Tuple

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)

PWM_RESOLUTION = 4096


class IPwmDriver(Protocol):
    """Multi-channel PWM controller (PCA9685-style: 16 pins, 12-bit on/off counters)"""

    address: int

    def set_pwm(self, pin: int, on: int, off: int) -> None:
        """Set the on/off tick of a pin within one 4096-tick PWM period"""
        ...

    def set_pwm_frequency(self, frequency: float) -> None:
        ...


class VirtualPwmDriver(IPwmDriver):
    """PWM driver that records duty cycles in memory instead of touching a bus"""

    def __init__(self, address: int = 0x40, pins: int = 16, frequency: float = 1000.0):
        self.address = address
        self.pins = pins
        self.frequency = frequency
        self._registers: Dict[int, Tuple[int, int]] = {}
        self.writes = 0
        log.info("Virtual PWM driver initialized", address=hex(address), pins=pins)

    def set_pwm(self, pin: int, on: int, off: int) -> None:
        if not 0 <= pin < self.pins:
            raise ValueError(f"PWM pin {pin} out of range 0..{self.pins - 1}")
        self._registers[pin] = (on, off)
        self.writes += 1

    def get_pwm(self, pin: int) -> Tuple[int, int]:
        return self._registers.get(pin, (0, 0))

    def duty_cycle(self, pin: int) -> float:
        on, off = self.get_pwm(pin)
        return (off - on) / PWM_RESOLUTION

    def set_pwm_frequency(self, frequency: float) -> None:
        self.frequency = frequency
