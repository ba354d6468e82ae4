"""Parser configuration support for vecset."""

from __future__ import annotations

import json
import os
import tomllib
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError
from .lexer import STRUCTURAL_CHARS

DEFAULT_MAX_DEPTH = 100

CONFIG_FILE_NAMES = ("vecset.toml", ".vecsetrc", "pyproject.toml")

ENV_MAX_DEPTH = "VECSET_MAX_DEPTH"
ENV_RESERVED = "VECSET_RESERVED"


@dataclass(frozen=True)
class ParserConfig:
    """Limits and grammar extensions applied to every parse."""

    # Deepest allowed container nesting; None disables the limit
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH
    # Characters the lexer must report as unknown
    reserved: str = ""

    def __post_init__(self) -> None:
        if self.max_depth is not None:
            if isinstance(self.max_depth, bool) or not isinstance(self.max_depth, int):
                raise ConfigError(f"max_depth must be an integer, got {self.max_depth!r}")
            if self.max_depth < 1:
                raise ConfigError(f"max_depth must be at least 1, got {self.max_depth}")
        if not isinstance(self.reserved, str):
            raise ConfigError(f"reserved must be a string, got {self.reserved!r}")
        for char in self.reserved:
            if char in STRUCTURAL_CHARS or char.isspace():
                raise ConfigError(f"Character {char!r} is part of the grammar and cannot be reserved")

    def with_overrides(self, **changes: Any) -> "ParserConfig":
        changes = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **changes) if changes else self


def _read_json_config(path: Path) -> Dict[str, Any]:
    content = path.read_text(encoding="utf-8")
    try:
        return json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON: {exc.msg}", line=exc.lineno, column=exc.colno, path=str(path)) from exc


def _read_toml_config(path: Path) -> Dict[str, Any]:
    with path.open("rb") as handle:
        try:
            data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML: {exc}", path=str(path)) from exc
    if path.name == "pyproject.toml":
        return data.get("tool", {}).get("vecset", {})
    return data


def _parse_max_depth(raw: Any, source: str) -> Optional[int]:
    if raw is None:
        return None
    if isinstance(raw, str):
        text = raw.strip().lower()
        if text in ("", "none", "off", "unlimited"):
            return None
        try:
            return int(text)
        except ValueError as exc:
            raise ConfigError(f"{source}: max_depth must be an integer, got {raw!r}") from exc
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ConfigError(f"{source}: max_depth must be an integer, got {raw!r}")
    return raw


def _parse_parser_section(data: Mapping[str, Any], source: str) -> ParserConfig:
    section = data.get("parser", data)
    if not isinstance(section, Mapping):
        raise ConfigError(f"{source}: [parser] must be a table")
    max_depth = _parse_max_depth(section.get("max_depth", DEFAULT_MAX_DEPTH), source)
    reserved = section.get("reserved", "")
    if isinstance(reserved, (list, tuple)):
        reserved = "".join(str(item) for item in reserved)
    return ParserConfig(max_depth=max_depth, reserved=reserved)


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        if not explicit.exists():
            raise ConfigError(f"Config file not found: {explicit}", path=str(explicit))
        return explicit
    for candidate in CONFIG_FILE_NAMES:
        path = root / candidate
        if not path.exists():
            continue
        if candidate == "pyproject.toml" and not _read_toml_config(path):
            continue
        return path
    return None


def apply_env_overrides(config: ParserConfig, environ: Optional[Mapping[str, str]] = None) -> ParserConfig:
    env = os.environ if environ is None else environ
    updated = config
    if ENV_MAX_DEPTH in env:
        updated = replace(updated, max_depth=_parse_max_depth(env[ENV_MAX_DEPTH], ENV_MAX_DEPTH))
    if ENV_RESERVED in env:
        updated = replace(updated, reserved=env[ENV_RESERVED])
    return updated


def load_parser_config(
    root: Optional[Path] = None,
    explicit: Optional[Path] = None,
    *,
    environ: Optional[Mapping[str, str]] = None,
) -> ParserConfig:
    root = (root or Path.cwd()).resolve()
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        config = ParserConfig()
    else:
        if config_path.suffix == ".toml":
            data = _read_toml_config(config_path)
        else:
            data = _read_json_config(config_path)
        if not isinstance(data, Mapping):
            raise ConfigError("Configuration must be a table/object", path=str(config_path))
        config = _parse_parser_section(data, str(config_path))
    return apply_env_overrides(config, environ)


__all__ = [
    "DEFAULT_MAX_DEPTH",
    "ParserConfig",
    "locate_config_file",
    "load_parser_config",
    "apply_env_overrides",
]
