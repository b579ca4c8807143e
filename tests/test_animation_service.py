import json
import os

import pytest

from animations.stair_animation import StairAnimation
from services.animation_service import AnimationService


def definition(name, brightness=4095):
    return {
        "name": name,
        "description": f"{name} animation",
        "timeline": [{"type": "FadeTo", "at": 0, "options": {"brightness": brightness, "duration": 100}}],
    }


def write_json(path, data, mtime=None):
    path.write_text(json.dumps(data), encoding="utf-8")
    if mtime is not None:
        os.utime(path, (mtime, mtime))


@pytest.fixture
def animations_dir(tmp_path):
    write_json(tmp_path / "welcome.json", definition("Welcome"), mtime=1_000_000)
    (tmp_path / "wave.yaml").write_text(
        "description: yaml animation\n"
        "timeline:\n"
        "  - type: FadeIn\n"
        "    at: 0\n"
        "    options: {start: 0, end: 100, duration: 50}\n",
        encoding="utf-8",
    )
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    return tmp_path


@pytest.fixture
def service(animations_dir, sink, ticks, clock):
    return AnimationService(animations_dir, sink, tick_source=ticks, clock=clock)


class TestAnimationServiceLoading:

    def test_list(self, service):
        listing = service.get_animations_list()

        assert listing == [
            {"key": "wave", "name": "wave", "description": "yaml animation"},
            {"key": "welcome", "name": "Welcome", "description": "Welcome animation"},
        ]

    def test_get_animation(self, service):
        animation = service.get_animation("welcome")

        assert isinstance(animation, StairAnimation)
        assert animation.name == "Welcome"

    def test_unknown_animation(self, service):
        with pytest.raises(KeyError):
            service.get_animation("missing")

    def test_invalid_file_skipped(self, animations_dir, service):
        (animations_dir / "broken.json").write_text("{not json", encoding="utf-8")
        write_json(animations_dir / "invalid.json", {"timeline": [{"type": "Nope", "at": 0, "options": {}}]})

        keys = [entry["key"] for entry in service.get_animations_list()]

        assert keys == ["wave", "welcome"]

    def test_missing_directory(self, tmp_path, sink):
        service = AnimationService(tmp_path / "nowhere", sink)
        assert service.get_animations_list() == []


class TestAnimationServiceChangeDetection:

    def test_unchanged_directory_reuses_instances(self, service):
        first = service.get_animation("welcome")
        assert service.get_animation("welcome") is first

    def test_new_file_keeps_unchanged_instances(self, animations_dir, service):
        welcome = service.get_animation("welcome")

        write_json(animations_dir / "night.json", definition("Night"), mtime=1_000_500)

        assert service.get_animation("night").name == "Night"
        assert service.get_animation("welcome") is welcome

    def test_modified_file_rebuilt(self, animations_dir, service):
        welcome = service.get_animation("welcome")

        write_json(animations_dir / "welcome.json", definition("Welcome v2"), mtime=1_000_900)

        rebuilt = service.get_animation("welcome")
        assert rebuilt is not welcome
        assert rebuilt.name == "Welcome v2"

    def test_removed_file_dropped_and_stopped(self, animations_dir, service):
        welcome = service.get_animation("welcome")
        welcome.start()

        (animations_dir / "welcome.json").unlink()

        assert [e["key"] for e in service.get_animations_list()] == ["wave"]
        assert not welcome.is_running()

    def test_reload_rebuilds_everything(self, service):
        welcome = service.get_animation("welcome")
        service.reload()

        assert service.get_animation("welcome") is not welcome

    def test_dir_hash(self, service):
        assert service.dir_hash is None
        service.get_animations_list()
        assert len(service.dir_hash) == 32


class TestShippedAnimations:

    def test_repository_animations_load(self):
        """Every definition in src/config/animations builds."""
        from pathlib import Path
        from hardware.pwm import VirtualBrightnessSink

        path = Path(__file__).parent.parent / "src" / "config" / "animations"
        service = AnimationService(path, VirtualBrightnessSink(channels=range(18)))

        keys = [entry["key"] for entry in service.get_animations_list()]
        assert keys == ["night_walk", "wave", "welcome"]
