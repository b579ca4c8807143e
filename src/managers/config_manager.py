"""
Config Manager

Main configuration manager with include system support.
Loads modular YAML files and parses them into AppConfig.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional

from models.config import (
    AppConfig, DriverConfig, EngineConfig, LoggingConfig,
    parse_address, parse_pin_mapping,
)
from models.easing import get_easing
from models.enums import LogLevel
from models.errors import ConfigurationError
from utils.enum_helper import EnumHelper
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).parent.parent


class ConfigManager:
    """
    Main configuration manager with include system support

    Loads config.yaml and processes include: directive to load modular YAML files.
    Falls back to factory_defaults.yaml when the main config cannot be read.

    Example:
        config = ConfigManager().load()
        config.engine.easing        # "easeInOutQuad"
        config.pin_mapping[0].pin   # 0
    """

    def __init__(self, config_path="config/config.yaml", defaults_path="config/factory_defaults.yaml"):
        """
        Initialize ConfigManager

        Args:
            config_path: Path to main config.yaml (relative to src/ unless absolute)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = Path(config_path)
        self.factory_defaults_path = Path(defaults_path)
        self.data: Dict[str, Any] = {}
        self.config: Optional[AppConfig] = None

    @staticmethod
    def _resolve(path: Path) -> Path:
        return path if path.is_absolute() else SRC_DIR / path

    def load(self) -> AppConfig:
        """
        Load YAML configuration with include system support

        Process:
        1. Load main config.yaml
        2. If it has 'include:' list, load and merge those files
        3. Otherwise treat as monolithic config
        4. Fallback to factory defaults on read failure
        5. Parse into AppConfig

        Raises:
            ConfigurationError: config readable but invalid (bad easing, log level, mapping)
        """
        full_path = self._resolve(self.config_path)
        try:
            with open(full_path, "r", encoding="utf-8") as f:
                main_config = yaml.safe_load(f) or {}

            if "include" in main_config:
                log.info("Using include-based configuration")
                self.data = self._load_with_includes(main_config["include"], full_path.parent)
                self.data.update({k: v for k, v in main_config.items() if k != "include"})
            else:
                log.info("Using monolithic configuration")
                self.data = main_config

        except (OSError, yaml.YAMLError) as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")

            with open(self._resolve(self.factory_defaults_path), "r", encoding="utf-8") as f:
                self.data = yaml.safe_load(f) or {}

        self.config = self._parse(self.data)
        log.info(
            "Configuration loaded",
            drivers=len(self.config.drivers),
            channels=len(self.config.pin_mapping),
            easing=self.config.engine.easing,
        )
        return self.config

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        """
        Load and merge multiple YAML files from include list

        Args:
            include_list: List of filenames to load (e.g., ["hardware.yaml", "engine.yaml"])
            config_dir: Directory containing config files

        Returns:
            Merged config dict
        """
        merged: Dict[str, Any] = {}

        for filename in include_list:
            filepath = config_dir / filename
            try:
                with open(filepath, "r", encoding="utf-8") as f:
                    file_data = yaml.safe_load(f)
                    if file_data:
                        merged.update(file_data)
                        log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))
            except FileNotFoundError:
                log.error(f"File not found: {filename}")
                raise

        log.info("Config merge complete", total_keys=len(merged))
        return merged

    def _parse(self, data: Dict[str, Any]) -> AppConfig:
        logging_data = data.get("logging") or {}
        engine_data = data.get("engine") or {}

        logging = LoggingConfig(
            level=EnumHelper.from_string(LogLevel, logging_data.get("level"), default=LogLevel.INFO, field="logging.level"),
            use_colors=bool(logging_data.get("use_colors", True)),
        )

        easing = engine_data.get("easing", "linear")
        get_easing(easing)  # raises ConfigurationError for unknown names
        engine = EngineConfig(
            easing=easing,
            loop_infinite=bool(engine_data.get("loop_infinite", False)),
            tick_interval_ms=float(engine_data.get("tick_interval_ms", 0)),
        )

        drivers = []
        for entry in data.get("drivers") or []:
            if "name" not in entry:
                raise ConfigurationError(f"Driver entry without name: {entry!r}", field="drivers")
            drivers.append(DriverConfig(
                name=str(entry["name"]),
                address=parse_address(entry.get("address", 0x40)),
                pins=int(entry.get("pins", 16)),
                frequency=float(entry.get("frequency", 1000)),
            ))

        pin_mapping = parse_pin_mapping(data.get("pin_mapping"))
        driver_names = {d.name for d in drivers}
        for mapping in pin_mapping:
            if mapping.driver not in driver_names:
                raise ConfigurationError(
                    f"Channel {mapping.channel} mapped to unknown driver '{mapping.driver}'",
                    field="pin_mapping",
                )

        return AppConfig(
            logging=logging,
            engine=engine,
            drivers=drivers,
            pin_mapping=pin_mapping,
            animations_path=str(data.get("animations_path", "config/animations")),
        )
