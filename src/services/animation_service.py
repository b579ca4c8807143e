"""Animation service - Loads stair animation definitions from a directory"""

import hashlib
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from animations.stair_animation import StairAnimation
from hardware.pwm.brightness_sink import IBrightnessSink
from models.errors import ConfigurationError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ANIMATION)

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


class AnimationService:
    """
    Provides StairAnimation instances built from definition files.

    Every `*.json` / `*.yaml` file in the directory is one animation, keyed
    by file stem. The directory is re-read only when the hash over file
    names and mtimes changes; animations whose file did not change keep
    their instance (and therefore their running state).

    Example:
        service = AnimationService("config/animations", mapper)
        service.get_animations_list()   # [{"key": "welcome", "name": "Welcome", ...}]
        service.get_animation("welcome").start()
    """

    def __init__(self, animations_path: Union[str, Path], sink: IBrightnessSink, **animation_options: Any):
        """
        Args:
            animations_path: Directory with definition files
            sink: Brightness sink handed to every StairAnimation
            animation_options: Extra StairAnimation keyword arguments (tick_source, easing, ...)
        """
        self.animations_path = Path(animations_path)
        self.sink = sink
        self.animation_options = animation_options

        self.animations: Dict[str, StairAnimation] = {}
        self.dir_hash: Optional[str] = None
        self._mtimes: Dict[str, float] = {}

    # ============================================================
    # Change detection
    # ============================================================

    def _definition_files(self) -> List[Path]:
        return sorted(
            path for path in self.animations_path.iterdir()
            if path.is_file() and path.suffix.lower() in SUPPORTED_SUFFIXES
        )

    def _generate_dir_hash(self) -> Optional[str]:
        """MD5 over file names and mtimes, None when the directory cannot be read"""
        try:
            digest = hashlib.md5()
            for path in self._definition_files():
                digest.update(f"{path.name}{path.stat().st_mtime_ns}".encode("utf-8"))
            return digest.hexdigest()
        except OSError as ex:
            log.error("Animation directory hash failed", path=str(self.animations_path), error=str(ex))
            return None

    def _check_for_changes(self) -> bool:
        current = self._generate_dir_hash()
        if current is not None and current != self.dir_hash:
            self.dir_hash = current
            return True
        return False

    # ============================================================
    # Loading
    # ============================================================

    @staticmethod
    def _read_definition(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
        if not isinstance(data, dict):
            raise ConfigurationError(f"{path.name}: expected an object at top level")
        return data

    def _load_animations(self) -> None:
        """Rebuild the animation map, reusing instances whose file is unchanged"""
        loaded: Dict[str, StairAnimation] = {}
        mtimes: Dict[str, float] = {}

        try:
            files = self._definition_files()
        except OSError as ex:
            log.error("Animation directory unreadable", path=str(self.animations_path), error=str(ex))
            return

        for path in files:
            key = path.stem
            if key in loaded:
                log.warn(f"Duplicate animation key '{key}', skipping {path.name}")
                continue
            try:
                mtime = path.stat().st_mtime_ns
                if key in self.animations and self._mtimes.get(key) == mtime:
                    loaded[key] = self.animations[key]
                else:
                    config = self._read_definition(path)
                    config.setdefault("name", key)
                    loaded[key] = StairAnimation(config, self.sink, **self.animation_options)
                mtimes[key] = mtime
            except (OSError, ValueError, yaml.YAMLError, ConfigurationError) as ex:
                log.error(f"Failed to load animation {path.name}", error=str(ex), error_type=type(ex).__name__)

        for key, animation in self.animations.items():
            if loaded.get(key) is not animation and animation.is_running():
                animation.stop()

        self.animations = loaded
        self._mtimes = mtimes
        log.info(f"Loaded {len(loaded)} animations", keys=str(list(loaded.keys())))

    def _refresh(self) -> None:
        if self._check_for_changes() or not self.animations:
            self._load_animations()

    # ============================================================
    # Public API
    # ============================================================

    def reload(self) -> Dict[str, StairAnimation]:
        """Force a full re-read of the directory"""
        self.dir_hash = self._generate_dir_hash()
        self._mtimes = {}
        self._load_animations()
        return self.animations

    def get_animations_list(self) -> List[Dict[str, str]]:
        """List animations (reloading first when the directory changed)"""
        self._refresh()
        return [
            {"key": key, "name": animation.name, "description": animation.description}
            for key, animation in self.animations.items()
        ]

    def get_animation(self, name: str) -> StairAnimation:
        """
        Get animation by key (file stem).

        Raises:
            KeyError: no such animation
        """
        self._refresh()
        return self.animations[name]
