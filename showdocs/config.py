"""Configuration loading for showdocs (.showdocs.yml)."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .models import RenderMode
from .render import DEFAULT_STYLESHEET

CONFIG_FILENAME = ".showdocs.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file or command line options are invalid."""


@dataclass(frozen=True)
class ShowDocsConfig:
    """Settings applied uniformly to every page of a run."""

    output_dir: Optional[Path] = None
    mode: RenderMode = RenderMode.MIXED
    verbose: bool = False
    stylesheet: str = DEFAULT_STYLESHEET
    log_file: Optional[Path] = None


def load_config(config_path: Path) -> ShowDocsConfig:
    """Load configuration from disk, returning defaults when no file exists."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent

    if not config_file.exists():
        return ShowDocsConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    output_dir = _as_str(data.get("output_dir"))
    log_file = _as_str(data.get("log_file"))
    stylesheet = _as_str(data.get("stylesheet"))

    return ShowDocsConfig(
        output_dir=root / output_dir if output_dir else None,
        mode=parse_mode(data.get("mode")) if data.get("mode") is not None else RenderMode.MIXED,
        verbose=_as_bool(data.get("verbose")) or False,
        stylesheet=stylesheet or DEFAULT_STYLESHEET,
        log_file=root / log_file if log_file else None,
    )


def merge_cli_args(
    config: ShowDocsConfig,
    *,
    output_dir: str | None = None,
    mode: str | None = None,
    verbose: bool = False,
    stylesheet: str | None = None,
    log_file: str | None = None,
) -> ShowDocsConfig:
    """Return ``config`` with any options given on the command line applied."""
    updates: Dict[str, Any] = {}
    if output_dir:
        updates["output_dir"] = Path(output_dir)
    if mode:
        updates["mode"] = parse_mode(mode)
    if verbose:
        updates["verbose"] = True
    if stylesheet:
        updates["stylesheet"] = stylesheet
    if log_file:
        updates["log_file"] = Path(log_file)
    return replace(config, **updates)


def parse_mode(value: Any) -> RenderMode:
    if isinstance(value, RenderMode):
        return value
    try:
        return RenderMode(str(value).strip().lower())
    except ValueError as exc:
        choices = ", ".join(mode.value for mode in RenderMode)
        raise ConfigError(f"Unknown display mode {value!r} (expected one of: {choices})") from exc


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ShowDocsConfig",
    "load_config",
    "merge_cli_args",
    "parse_mode",
]
