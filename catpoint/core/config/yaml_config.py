from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from catpoint.core.errors import ConfigError

DEFAULT_CAT_CONFIDENCE_THRESHOLD = 50.0
REPOSITORY_BACKENDS = ("memory", "json")


@dataclass(frozen=True)
class SecurityConfig:
    """Security service tuning."""
    cat_confidence_threshold: float = DEFAULT_CAT_CONFIDENCE_THRESHOLD


@dataclass(frozen=True)
class RepositoryConfig:
    """Which repository backend to build and where it stores its state."""
    backend: str = "json"
    path: str = "catpoint_state.json"


@dataclass(frozen=True)
class ImageServiceConfig:
    """Fake image service settings (``seed=None`` means non-deterministic)."""
    seed: Optional[int] = None


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(frozen=True)
class AppConfig:
    """
    Root application configuration loaded from YAML.

    This is the single source of truth for runtime-tunable values so the EXE
    can be configured without rebuilding.
    """
    security: SecurityConfig = field(default_factory=SecurityConfig)
    repository: RepositoryConfig = field(default_factory=RepositoryConfig)
    image_service: ImageServiceConfig = field(default_factory=ImageServiceConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _read_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except UnicodeDecodeError as e:
            raise ConfigError(f"config.yaml is not valid UTF-8: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"config.yaml is not valid YAML: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError("config.yaml must contain a YAML mapping at the root")
    return data


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = raw.get(key) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a mapping")
    return value


def _resolve_default_config_path() -> Path:
    """
    Resolve config.yaml location.

    Priority:
    1) CATPOINT_CONFIG env var if provided
    2) config.yaml next to the executable (or this module when running from source)
    3) ./config.yaml in current working directory
    """
    env = os.getenv("CATPOINT_CONFIG")
    if env:
        return Path(env).expanduser().resolve()

    # PyInstaller-friendly: executable directory
    exe_dir = Path(sys.executable).resolve().parent
    candidate = exe_dir / "config.yaml"
    if candidate.exists():
        return candidate

    # source/dev fallback
    return Path("config.yaml").resolve()


def parse_app_config(raw: Dict[str, Any]) -> AppConfig:
    """
    Convert a raw YAML mapping into typed config objects.

    Parameters
    ----------
    raw
        Mapping loaded from config.yaml. Missing sections use defaults.

    Returns
    -------
    AppConfig
        Parsed and validated configuration.

    Raises
    ------
    ConfigError
        If a value has the wrong type or is out of range.
    """
    try:
        # ---- security ----
        s = _section(raw, "security")
        threshold = float(s.get("cat_confidence_threshold", DEFAULT_CAT_CONFIDENCE_THRESHOLD))
        if not 0.0 <= threshold <= 100.0:
            raise ConfigError(f"cat_confidence_threshold must be within [0, 100], got {threshold}")
        security = SecurityConfig(cat_confidence_threshold=threshold)

        # ---- repository ----
        r = _section(raw, "repository")
        backend = str(r.get("backend", "json")).lower()
        if backend not in REPOSITORY_BACKENDS:
            raise ConfigError(f"repository.backend must be one of {REPOSITORY_BACKENDS}, got {backend!r}")
        repository = RepositoryConfig(backend=backend, path=str(r.get("path", "catpoint_state.json")))

        # ---- image service ----
        i = _section(raw, "image_service")
        seed = i.get("seed")
        image_service = ImageServiceConfig(seed=None if seed is None else int(seed))

        # ---- logging ----
        lg = _section(raw, "logging")
        logging_cfg = LoggingConfig(level=str(lg.get("level", "INFO")).upper())
    except (TypeError, ValueError) as e:
        if isinstance(e, ConfigError):
            raise
        raise ConfigError(f"Invalid configuration value: {e}") from e

    return AppConfig(
        security=security,
        repository=repository,
        image_service=image_service,
        logging=logging_cfg,
    )


def load_app_config(path: Optional[str] = None) -> AppConfig:
    """
    Load application configuration from YAML.

    Parameters
    ----------
    path
        Explicit path to config.yaml. If None, uses default resolution and
        falls back to built-in defaults when no file is found.

    Returns
    -------
    AppConfig
        Parsed and validated configuration.

    Raises
    ------
    FileNotFoundError
        If an explicit config path does not exist.
    ConfigError
        If the file content is malformed.
    """
    if path:
        cfg_path = Path(path).expanduser().resolve()
        if not cfg_path.exists():
            raise FileNotFoundError(f"Config not found: {cfg_path}")
    else:
        cfg_path = _resolve_default_config_path()
        if not cfg_path.exists():
            return AppConfig()

    return parse_app_config(_read_yaml(cfg_path))
