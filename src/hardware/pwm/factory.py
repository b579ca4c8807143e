from __future__ import annotations
from typing import Callable, Dict, Optional

from hardware.pwm.pin_mapper import MappedPin, PinMapper
from hardware.pwm.pwm_driver import IPwmDriver, VirtualPwmDriver
from models.config import AppConfig, DriverConfig
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)

DriverBuilder = Callable[[DriverConfig], IPwmDriver]


def _virtual_driver(config: DriverConfig) -> IPwmDriver:
    return VirtualPwmDriver(address=config.address, pins=config.pins, frequency=config.frequency)


class PinMapperFactory:
    """
    Builds a PinMapper from AppConfig: one driver per `drivers` entry,
    channel mapping from `pin_mapping`.
    Does NOT speak animation logic. Pure hardware factory.
    """

    @staticmethod
    def create(config: AppConfig, driver_builder: Optional[DriverBuilder] = None) -> PinMapper:
        """
        Args:
            config: parsed application config
            driver_builder: DriverConfig → driver (VirtualPwmDriver by default)

        Returns:
            PinMapper with every configured driver and channel
        """
        build = driver_builder or _virtual_driver
        mapper = PinMapper()

        for driver_config in config.drivers:
            mapper.add_driver(driver_config.name, build(driver_config))
            log.info(
                f"PWM driver '{driver_config.name}' ready",
                address=hex(driver_config.address),
                pins=driver_config.pins,
            )

        mapping: Dict[int, MappedPin] = {
            entry.channel: MappedPin(driver=entry.driver, pin=entry.pin, step=entry.step)
            for entry in config.pin_mapping
        }
        mapper.set_pin_mapping(mapping)

        log.info("PinMapper created", drivers=len(config.drivers), channels=mapper.count())
        return mapper
