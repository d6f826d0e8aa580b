"""Typed loading of the optional ``podrel.toml`` file.

The file only supplies defaults; CLI flags and ``PODREL_*`` environment
variables override whatever it contains.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from .result import Err, Ok, Result

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "PodrelConfig",
    "ReleaseDefaults",
    "load_config",
    "load_config_if_present",
]

CONFIG_FILENAME = "podrel.toml"

StrDict = dict[str, object]


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseDefaults:
    """The ``[release]`` table.

    ``bump`` is kept as the raw string so that an invalid value is reported
    by the orchestrator as an invalid configuration, not silently replaced.
    """

    spec: str | None = None
    repo: str | None = None
    bump: str = "build"
    skip_lint: bool = False
    no_clean: bool = False
    verbose: bool = False


@dataclass(frozen=True, slots=True)
class PodrelConfig:
    """Main configuration container."""

    release: ReleaseDefaults = field(default_factory=ReleaseDefaults)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> PodrelConfig:
        """Create config from a parsed TOML mapping."""
        release = _get_table(data, "release") or {}
        return cls(
            release=ReleaseDefaults(
                spec=_get_str(release, "spec"),
                repo=_get_str(release, "repo"),
                bump=_get_str(release, "bump") or "build",
                skip_lint=_get_bool(release, "skip_lint"),
                no_clean=_get_bool(release, "no_clean"),
                verbose=_get_bool(release, "verbose"),
            )
        )


def _as_str_dict(obj: object) -> StrDict | None:
    if not isinstance(obj, dict):
        return None
    d = cast(dict[object, object], obj)
    if not all(isinstance(k, str) for k in d.keys()):
        return None
    return cast(StrDict, d)


def _get_table(table: Mapping[str, object], key: str) -> StrDict | None:
    return _as_str_dict(table.get(key))


def _get_str(table: Mapping[str, object], key: str) -> str | None:
    # Empty strings count as unset.
    value = table.get(key)
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _get_bool(table: Mapping[str, object], key: str) -> bool:
    value = table.get(key)
    return value if isinstance(value, bool) else False


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return Err(ConfigError(f"config file not found: {path}", path=path))
    except OSError as e:
        return Err(ConfigError(f"cannot read {path}: {e.strerror or e}", path=path))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        return Err(ConfigError(f"Invalid TOML in {path.name}: {e}", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[PodrelConfig, ConfigError]:
    """Parse ``path``; unknown keys are ignored, wrong types fall back to defaults."""
    parsed = _parse_toml(path)
    if isinstance(parsed, Err):
        return parsed
    return Ok(PodrelConfig.from_dict(parsed.value))


def load_config_if_present(path: Path) -> Result[PodrelConfig, ConfigError]:
    """Load config from file, or return the default config if there is no file.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(PodrelConfig())
    return load_config(path)
