"""
Unit tests for catpoint.bootstrap.build_app_system wiring.
"""

from __future__ import annotations

from pathlib import Path

from catpoint.bootstrap import build_app_system
from catpoint.core.config.yaml_config import AppConfig, ImageServiceConfig, RepositoryConfig, SecurityConfig
from catpoint.core.state.json_repository import JsonFileSecurityRepository
from catpoint.core.state.security_repository import InMemorySecurityRepository
from catpoint.domain.models import AlarmStatus, ArmingStatus, Sensor, SensorType
from catpoint.image.image_service import FakeImageService


def test_build_with_memory_backend() -> None:
    cfg = AppConfig(
        security=SecurityConfig(cat_confidence_threshold=65.0),
        repository=RepositoryConfig(backend="memory"),
        image_service=ImageServiceConfig(seed=3),
    )
    wiring = build_app_system(cfg=cfg)

    assert isinstance(wiring.repository, InMemorySecurityRepository)
    assert isinstance(wiring.image_service, FakeImageService)
    assert wiring.service.repository is wiring.repository
    assert wiring.service.cat_confidence_threshold == 65.0


def test_build_from_yaml_with_json_backend(tmp_path: Path) -> None:
    state = tmp_path / "state.json"
    cfg_path = tmp_path / "config.yaml"
    cfg_path.write_text(
        "repository:\n"
        "  backend: json\n"
        f"  path: {state.as_posix()}\n"
        "logging:\n"
        "  level: WARNING\n",
        encoding="utf-8",
    )

    wiring = build_app_system(config_path=str(cfg_path))
    assert isinstance(wiring.repository, JsonFileSecurityRepository)

    d1 = Sensor(name="D1", sensor_type=SensorType.DOOR)
    wiring.service.add_sensor(d1)
    wiring.service.set_arming_status(ArmingStatus.ARMED_AWAY)
    wiring.service.change_sensor_activation_status(d1, True)

    reopened = build_app_system(config_path=str(cfg_path))
    assert reopened.service.get_arming_status() is ArmingStatus.ARMED_AWAY
    assert reopened.service.get_alarm_status() is AlarmStatus.PENDING_ALARM
    assert [s.active for s in reopened.service.get_sensors()] == [True]
