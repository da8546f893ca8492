from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from catpoint.core.config.yaml_config import AppConfig, load_app_config
from catpoint.core.state.json_repository import JsonFileSecurityRepository
from catpoint.core.state.security_repository import InMemorySecurityRepository, SecurityRepository
from catpoint.image.image_service import FakeImageService, ImageService
from catpoint.listeners.logging_listener import LoggingStatusListener
from catpoint.logging_config import configure_logging
from catpoint.services.security_service import SecurityService


@dataclass(frozen=True)
class AppWiring:
    """Everything the UI layer needs to run the system."""
    config: AppConfig
    repository: SecurityRepository
    image_service: ImageService
    service: SecurityService


def build_repository(cfg: AppConfig) -> SecurityRepository:
    if cfg.repository.backend == "memory":
        return InMemorySecurityRepository()
    return JsonFileSecurityRepository(path=cfg.repository.path)


def build_app_system(config_path: Optional[str] = None, cfg: Optional[AppConfig] = None) -> AppWiring:
    cfg = cfg or load_app_config(config_path)
    configure_logging(cfg.logging.level)

    # --- STATE ---
    repository = build_repository(cfg)

    # --- CAMERA ---
    image_service = FakeImageService(seed=cfg.image_service.seed)

    # --- SERVICE ---
    service = SecurityService(
        repository=repository,
        image_service=image_service,
        cat_confidence_threshold=cfg.security.cat_confidence_threshold,
    )
    service.add_status_listener(LoggingStatusListener())

    return AppWiring(config=cfg, repository=repository, image_service=image_service, service=service)
