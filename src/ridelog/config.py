"""
ridelog configuration loader

This module centralizes *all* configuration handling for ridelog.

Design goals:
- Keep the CLIs Unix-friendly: flags override everything.
- Provide sensible defaults if no config exists.
- Allow per-machine config without committing personal paths:
    ~/.config/ridelog/config.toml
- Allow repo-local config:
    <repo_root>/config/config.toml
- Allow environment variable overrides for automation.

Precedence (highest to lowest) for any given value:
1) CLI argument (handled by each script)
2) Environment variables (RIDELOG_*)
3) User config: ~/.config/ridelog/config.toml
4) Repo config: <repo_root>/config/config.toml
5) Hard defaults (~/Rides/... paths, 100 ms ticks at 1x)

This module uses Python's built-in tomllib on Python 3.11+, or `tomli` otherwise.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

# ---------------------------------------------------------------------------
# TOML loading helpers
# ---------------------------------------------------------------------------
def _load_toml(path: Path) -> dict[str, Any]:
    """
    Parse a TOML file at `path`.

    Behavior:
    - If the file does not exist, return an empty dict (non-fatal).
    - If the file exists but is invalid TOML, raise a RuntimeError
      with a clear, user-facing message.
    """
    if not path.is_file():
        return {}

    try:
        try:
            # Python 3.11+ standard library
            import tomllib
            return tomllib.loads(path.read_text(encoding="utf-8")) or {}
        except ModuleNotFoundError:
            import tomli
            return tomli.loads(path.read_text(encoding="utf-8")) or {}
    except Exception as e:
        # Wrap parsing errors with file context for usability
        raise RuntimeError(f"Failed to parse TOML config: {path} ({e})") from e


# ---------------------------------------------------------------------------
# Generic coercion helpers
# ---------------------------------------------------------------------------
def _deep_get(d: dict[str, Any], dotted_key: str) -> Any:
    """
    Fetch nested dictionary values using dot-separated keys.

    Example:
        _deep_get(cfg, "paths.work_root")

    Returns None if any part of the path is missing.
    """
    cur: Any = d
    for part in dotted_key.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return None
        cur = cur[part]
    return cur


def _as_path(v: Any) -> Optional[Path]:
    """
    Coerce a config value into a pathlib.Path if possible.

    Returns None if value cannot be interpreted as a path.
    """
    if v is None:
        return None
    if isinstance(v, Path):
        return v.expanduser()
    if isinstance(v, str):
        return Path(v).expanduser()
    return None


def _as_positive_float(v: Any) -> Optional[float]:
    """
    Coerce a config value into a float > 0.

    Strings are accepted so environment variables behave like TOML numbers.
    Returns None for anything else, including 0 and negatives.
    """
    if v is None or isinstance(v, bool):
        return None
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    return f if f > 0 else None


def _as_rate_choices(v: Any) -> Optional[tuple[float, ...]]:
    """
    Coerce a list (TOML) or comma-separated string (env) of rates.

    Invalid entries are dropped; an empty result means "not configured".
    """
    if v is None:
        return None
    if isinstance(v, str):
        v = [s for s in v.split(",") if s.strip()]
    if not isinstance(v, (list, tuple)):
        return None
    rates = [r for r in (_as_positive_float(x) for x in v) if r is not None]
    return tuple(sorted(set(rates))) or None


# ---------------------------------------------------------------------------
# Repo discovery + defaults
# ---------------------------------------------------------------------------
def find_repo_root(start: Path) -> Optional[Path]:
    """
    Walk upward from `start` looking for the ridelog repo root.

    Heuristic:
    - The presence of a `config/` directory marks the repo root
    """
    start = start.resolve()
    for p in [start] + list(start.parents):
        if (p / "config").is_dir():
            return p
    return None


def default_runtime_root() -> Path:
    """
    Default runtime root if nothing is configured.

    The work root (where track files are looked up) derives from this path
    unless explicitly overridden.
    """
    return Path.home() / "Rides"


# ---------------------------------------------------------------------------
# Typed config dataclasses
# ---------------------------------------------------------------------------
DEFAULT_RATE_CHOICES = (0.5, 1.0, 2.0, 5.0, 10.0)


@dataclass(frozen=True)
class PlaybackConfig:
    """
    Autoplay settings.

    base_period_ms is the tick interval at rate 1.0; the effective interval
    is base_period_ms / rate.
    """

    base_period_ms: float = 100.0
    default_rate: float = 1.0
    rate_choices: tuple[float, ...] = DEFAULT_RATE_CHOICES

    @property
    def base_period_s(self) -> float:
        return self.base_period_ms / 1000.0


@dataclass(frozen=True)
class RidelogPaths:
    """
    Canonical resolved filesystem paths used by ridelog.
    """

    runtime_root: Path
    work_root: Path


@dataclass(frozen=True)
class RidelogConfig:
    """
    Fully merged ridelog configuration.

    Attributes:
    - paths: resolved filesystem layout
    - playback: autoplay behavior
    - source: provenance map showing where each value came from
    """

    paths: RidelogPaths
    playback: PlaybackConfig
    source: dict[str, str]


_PATH_KEYS = ("paths.runtime_root", "paths.work_root")
_PLAYBACK_KEYS = ("playback.base_period_ms", "playback.default_rate", "playback.rate_choices")

ENV_MAP = {
    "RIDELOG_RUNTIME_ROOT": "paths.runtime_root",
    "RIDELOG_WORK_ROOT": "paths.work_root",
    "RIDELOG_BASE_PERIOD_MS": "playback.base_period_ms",
    "RIDELOG_DEFAULT_RATE": "playback.default_rate",
    "RIDELOG_RATE_CHOICES": "playback.rate_choices",
}


def _coerce(key: str, v: Any) -> Any:
    if key in _PATH_KEYS:
        return _as_path(v)
    if key == "playback.rate_choices":
        return _as_rate_choices(v)
    return _as_positive_float(v)


# ---------------------------------------------------------------------------
# Main config loader
# ---------------------------------------------------------------------------
def load_config(
    repo_root: Optional[Path] = None,
    repo_config_path: Optional[Path] = None,
    user_config_path: Optional[Path] = None,
    environ: Optional[dict[str, str]] = None,
) -> RidelogConfig:
    """
    Load, merge, and normalize all ridelog configuration.

    This function is the single authoritative entry point
    for configuration access.
    """

    # Locate repo and config files
    if repo_root is None:
        repo_root = find_repo_root(Path(__file__).resolve())
    if repo_config_path is None and repo_root is not None:
        repo_config_path = repo_root / "config" / "config.toml"
    if user_config_path is None:
        user_config_path = Path.home() / ".config" / "ridelog" / "config.toml"
    if environ is None:
        environ = dict(os.environ)

    # Load raw TOML dicts
    repo_cfg = _load_toml(repo_config_path) if repo_config_path else {}
    user_cfg = _load_toml(user_config_path) if user_config_path else {}

    defaults = PlaybackConfig()
    values: dict[str, Any] = {
        "paths.runtime_root": default_runtime_root(),
        "paths.work_root": None,
        "playback.base_period_ms": defaults.base_period_ms,
        "playback.default_rate": defaults.default_rate,
        "playback.rate_choices": defaults.rate_choices,
    }

    # Track provenance for debugging
    src = {k: "default" for k in values}

    # Repo, then user config (user overrides repo)
    for cfg, label, path in ((repo_cfg, "repo", repo_config_path), (user_cfg, "user", user_config_path)):
        for k in _PATH_KEYS + _PLAYBACK_KEYS:
            v = _coerce(k, _deep_get(cfg, k))
            if v is None:
                continue
            values[k] = v
            src[k] = f"{label}:{path}"

    # Environment variable overrides (highest non-CLI precedence)
    for env, k in ENV_MAP.items():
        raw = environ.get(env)
        if not raw:
            continue
        v = _coerce(k, raw)
        if v is None:
            continue
        values[k] = v
        src[k] = f"env:{env}"

    # Derive work root if only runtime_root was configured
    runtime_root: Path = values["paths.runtime_root"]
    work_root: Path = values["paths.work_root"] or runtime_root / "_work"

    paths = RidelogPaths(
        runtime_root=runtime_root.expanduser(),
        work_root=work_root.expanduser(),
    )
    playback = PlaybackConfig(
        base_period_ms=values["playback.base_period_ms"],
        default_rate=values["playback.default_rate"],
        rate_choices=values["playback.rate_choices"],
    )

    return RidelogConfig(paths=paths, playback=playback, source=src)
