"""
mdcompile configuration management (YAML layers + environment overrides).
"""
from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from jsonschema import Draft202012Validator

from mdcompile.core.entries import EntryCollection
from mdcompile.core.errors import ConfigError
from mdcompile.core.expander import CYCLE_MODES, DEFAULT_MAX_DEPTH
from mdcompile.core.utils.io import read_yaml
from mdcompile.core.utils.merge import merge_layers
from mdcompile.core.utils.paths import PROJECT_ROOT_ENV, resolve_project_root
from mdcompile.data import get_data_path, read_yaml as read_data_yaml

logger = logging.getLogger(__name__)

PROJECT_CONFIG_DIR = ".mdcompile"
ENV_PREFIX = "MDCOMPILE_"
FAILURE_POLICIES = ("abort", "continue")

# Environment variables with the config prefix that are not config overrides.
_RESERVED_ENV_KEYS = {PROJECT_ROOT_ENV}


class ConfigManager:
    """Load, merge, and validate mdcompile configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: MDCOMPILE_<section>__<key>
    2. Project config: <repo_root>/.mdcompile/config/*.yaml (alphabetical order)
    3. Bundled defaults: mdcompile.data/config/defaults.yaml
    """

    def __init__(self, repo_root: Optional[Path] = None) -> None:
        self.repo_root = Path(repo_root).resolve() if repo_root else resolve_project_root()
        self.core_config_dir = get_data_path("config")
        self.project_config_dir = self.repo_root / PROJECT_CONFIG_DIR / "config"

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        # Fail closed: configuration must never silently ignore invalid YAML.
        try:
            data = read_yaml(path, default={}, raise_on_error=True)
        except (OSError, yaml.YAMLError) as exc:
            raise ConfigError(f"Cannot load config file {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping, got {type(data).__name__}")
        return data

    def _load_directory(self, directory: Path) -> List[Dict[str, Any]]:
        if not directory.is_dir():
            return []
        layers = []
        for path in sorted([*directory.glob("*.yaml"), *directory.glob("*.yml")]):
            logger.debug("Loading config layer %s", path)
            layers.append(self.load_yaml(path))
        return layers

    # ========== Environment overrides ==========

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _parse_env_key(self, raw: str) -> List[str]:
        segs = raw.split("__") if "__" in raw else [raw]
        if any(seg == "" for seg in segs):
            raise ConfigError(f"Malformed {ENV_PREFIX}* key: empty segment in '{raw}'.")
        return [seg.lower() for seg in segs]

    def _iter_env_overrides(self):
        for key in sorted(os.environ.keys()):
            if not key.startswith(ENV_PREFIX) or key in _RESERVED_ENV_KEYS:
                continue
            raw = key[len(ENV_PREFIX) :]
            if not raw:
                continue
            yield self._parse_env_key(raw), self._coerce_type(os.environ[key])

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur: Any = root
        for part in path[:-1]:
            if not isinstance(cur, dict):
                raise ConfigError(f"Cannot override {'.'.join(path)}: path traverses a non-mapping")
            lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
            key = lower_map.get(part, part)
            if key not in cur:
                cur[key] = {}
            cur = cur[key]
        if not isinstance(cur, dict):
            raise ConfigError(f"Cannot override {'.'.join(path)}: parent is not a mapping")
        lower_map = {k.lower(): k for k in cur.keys() if isinstance(k, str)}
        cur[lower_map.get(path[-1], path[-1])] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        for path, typed_value in self._iter_env_overrides():
            logger.debug("Applying environment override %s", ".".join(path))
            self._set_nested(cfg, path, typed_value)

    # ========== Loading ==========

    def validate_schema(self, cfg: Dict[str, Any]) -> None:
        schema = read_data_yaml("schemas", "config.schema.yaml")
        validator = Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(cfg), key=lambda e: list(e.path))
        if errors:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err.path) or '<root>'}: {err.message}" for err in errors
            )
            raise ConfigError(f"Invalid configuration: {details}")

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge every configuration layer.

        Raises:
            ConfigError: On unreadable YAML, malformed env keys, or schema violations
        """
        cfg = merge_layers(
            [*self._load_directory(self.core_config_dir), *self._load_directory(self.project_config_dir)]
        )
        self.apply_env_overrides(cfg)
        if validate:
            self.validate_schema(cfg)
        return cfg


@dataclass
class CompileSettings:
    """Typed view of the merged configuration."""

    repo_root: Path
    cycle_detection: str = "path"
    failure_policy: str = "abort"
    max_depth: int = DEFAULT_MAX_DEPTH
    cache_includes: bool = False
    encoding: str = "utf-8"
    collections: List[EntryCollection] = field(default_factory=list)
    log_level: str = "WARNING"
    log_file: Optional[Path] = None

    @property
    def primary_collection(self) -> Optional[EntryCollection]:
        """First flat collection; single-entry compiles use its naming rule."""
        for collection in self.collections:
            if collection.kind == "flat":
                return collection
        return self.collections[0] if self.collections else None

    def get_collection(self, name: str) -> EntryCollection:
        for collection in self.collections:
            if collection.name == name:
                return collection
        known = ", ".join(c.name for c in self.collections) or "none"
        raise ConfigError(f"Unknown collection {name!r} (configured: {known})")

    @classmethod
    def from_config(cls, cfg: Dict[str, Any], *, repo_root: Path) -> "CompileSettings":
        section = cfg.get("compile", {}) or {}
        cycle_detection = str(section.get("cycle_detection", "path"))
        if cycle_detection not in CYCLE_MODES:
            raise ConfigError(f"compile.cycle_detection must be one of {CYCLE_MODES}, got {cycle_detection!r}")
        failure_policy = str(section.get("failure_policy", "abort"))
        if failure_policy not in FAILURE_POLICIES:
            raise ConfigError(f"compile.failure_policy must be one of {FAILURE_POLICIES}, got {failure_policy!r}")

        collections = [
            EntryCollection.from_config(item, root=repo_root, defaults=section)
            for item in (cfg.get("collections") or [])
        ]
        names = [c.name for c in collections]
        if len(names) != len(set(names)):
            raise ConfigError(f"Duplicate collection names in config: {names}")

        log_cfg = cfg.get("logging", {}) or {}
        log_file = log_cfg.get("file")
        log_path: Optional[Path] = None
        if log_file:
            log_path = Path(str(log_file))
            if not log_path.is_absolute():
                log_path = repo_root / log_path

        return cls(
            repo_root=repo_root,
            cycle_detection=cycle_detection,
            failure_policy=failure_policy,
            max_depth=int(section.get("max_depth", DEFAULT_MAX_DEPTH)),
            cache_includes=bool(section.get("cache_includes", False)),
            encoding=str(section.get("encoding", "utf-8")),
            collections=collections,
            log_level=str(log_cfg.get("level", "WARNING")).upper(),
            log_file=log_path,
        )


def load_settings(repo_root: Optional[Union[str, Path]] = None, *, validate: bool = True) -> CompileSettings:
    """Load configuration for ``repo_root`` and return typed settings."""
    manager = ConfigManager(Path(repo_root) if repo_root else None)
    cfg = manager.load_config(validate=validate)
    return CompileSettings.from_config(cfg, repo_root=manager.repo_root)


__all__ = [
    "PROJECT_CONFIG_DIR",
    "ENV_PREFIX",
    "FAILURE_POLICIES",
    "ConfigManager",
    "CompileSettings",
    "load_settings",
]
