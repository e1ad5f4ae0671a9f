#!/usr/bin/env python3
# ansify/config.py
"""
Config loader and defaults for ANSIfy.

Goals:
- Single JSON file per user, deep-merged over defaults.
- Basic validation with sane fallbacks.
- Immutable ArtConfig for the sampling/classification core.

Usage:
    from ansify.config import Config, make_art_config
    cfg = Config.load()                 # ~/.config/ansify/ansify.json or OS-specific
    art = cfg.art_config()
    art = make_art_config({"shading": True})
"""

from __future__ import annotations

import json
import logging
import os
import platform
import shutil
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

log = logging.getLogger(__name__)

# ----------------------------
# Defaults
# ----------------------------

# Tuned for a default monospace font's aspect ratio.
DEFAULT_CELL_WIDTH = 14
DEFAULT_CELL_HEIGHT = 26
DEFAULT_BRIGHTNESS_THRESHOLD = 125

DEFAULT_CONFIG: Dict[str, Any] = {
    "art": {
        "ignore_whitespaces": False,      # pure-white cells become blanks
        "legacy_style": False,            # every non-blank cell uses the shade glyph
        "shading": False,                 # dark cells use the shade glyph
        "brightness_threshold": DEFAULT_BRIGHTNESS_THRESHOLD,
        "cell_width": DEFAULT_CELL_WIDTH,
        "cell_height": DEFAULT_CELL_HEIGHT,
        "workers": 1,                     # >1 samples rows in a thread pool
    },
    "network": {
        "user_agent": "ansify/1.2 (+https://example.invalid)",
        "connect_timeout_s": 5.0,
        "read_timeout_s": 15.0,
        "retries": 2,
    },
    "render": {
        "format": "terminal",             # terminal | html | text
        "color": True,
    },
    "logging": {
        "level": "WARNING",
        "http_debug": False,
        "file": None,                     # path or None
        "rotate_bytes": 5 * 1024 * 1024,
        "rotate_keep": 3,
    },
}

RENDER_FORMATS = ("terminal", "html", "text")

# Original option names, as accepted by the web widget.
_ART_KEY_ALIASES = {
    "ignoreWhitespaces": "ignore_whitespaces",
    "legacyStyle": "legacy_style",
    "brightnessThreshold": "brightness_threshold",
    "cellWidth": "cell_width",
    "cellHeight": "cell_height",
}

# ----------------------------
# Helpers
# ----------------------------

def _os_config_home() -> str:
    """Return per-OS config base directory."""
    if platform.system() == "Windows":
        base = os.environ.get("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
        return os.path.join(base, "ANSIfy")
    if platform.system() == "Darwin":
        return os.path.join(os.path.expanduser("~/Library/Application Support"), "ANSIfy")
    return os.path.join(os.path.expanduser("~/.config"), "ansify")

def _default_config_path() -> str:
    """Resolve default config path, honoring ANSIFY_CONFIG env override."""
    env = os.environ.get("ANSIFY_CONFIG")
    if env:
        return os.path.expanduser(env)
    return os.path.join(_os_config_home(), "ansify.json")

def _deep_merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
    """Return deep-merged copy of dicts: values in b override a."""
    out = dict(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out

def _coerce_num(v: Any, default: float, minmax: Optional[Tuple[float, float]] = None) -> float:
    try:
        x = float(v)
    except (TypeError, ValueError):
        return float(default)
    if minmax:
        lo, hi = minmax
        if x < lo: x = lo
        if x > hi: x = hi
    return x

def _coerce_int(v: Any, default: int, minmax: Optional[Tuple[int, int]] = None) -> int:
    if isinstance(v, bool):
        return int(default)
    try:
        x = int(v)
    except (TypeError, ValueError):
        return int(default)
    if minmax:
        lo, hi = minmax
        if x < lo: x = lo
        if x > hi: x = hi
    return x

def _coerce_bool(v: Any, default: bool) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, str):
        s = v.strip().lower()
        if s in ("1", "true", "yes", "on"): return True
        if s in ("0", "false", "no", "off"): return False
    return default

# ----------------------------
# Art config
# ----------------------------

@dataclass(frozen=True)
class ArtConfig:
    """Fully-populated options for sampling and classification."""
    ignore_whitespaces: bool = False
    legacy_style: bool = False
    shading: bool = False
    brightness_threshold: int = DEFAULT_BRIGHTNESS_THRESHOLD
    cell_width: int = DEFAULT_CELL_WIDTH
    cell_height: int = DEFAULT_CELL_HEIGHT
    workers: int = 1


def make_art_config(partial: Optional[Mapping[str, Any]] = None) -> ArtConfig:
    """
    Build an ArtConfig from an optional partial mapping.

    Accepts snake_case keys or the original camelCase names. Unknown keys are
    ignored, missing ones take defaults. The mapping itself is left untouched.
    """
    if partial is None:
        return ArtConfig()
    if isinstance(partial, ArtConfig):
        return partial

    d = DEFAULT_CONFIG["art"]
    src: Dict[str, Any] = {}
    for k, v in partial.items():
        key = _ART_KEY_ALIASES.get(k, k)
        if key in d:
            src[key] = v

    return ArtConfig(
        ignore_whitespaces=_coerce_bool(src.get("ignore_whitespaces"), d["ignore_whitespaces"]),
        legacy_style=_coerce_bool(src.get("legacy_style"), d["legacy_style"]),
        shading=_coerce_bool(src.get("shading"), d["shading"]),
        brightness_threshold=_coerce_int(src.get("brightness_threshold"), d["brightness_threshold"], (0, 255)),
        cell_width=_coerce_int(src.get("cell_width"), d["cell_width"], (1, 4096)),
        cell_height=_coerce_int(src.get("cell_height"), d["cell_height"], (1, 4096)),
        workers=_coerce_int(src.get("workers"), d["workers"], (1, 64)),
    )

# ----------------------------
# Validation
# ----------------------------

def _validate(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Return validated copy with fallbacks applied."""
    defaults = json.loads(json.dumps(DEFAULT_CONFIG))
    c = _deep_merge(defaults, cfg or {})

    # art: normalise through the same path as programmatic callers
    art = make_art_config(c["art"])
    c["art"] = {
        "ignore_whitespaces": art.ignore_whitespaces,
        "legacy_style": art.legacy_style,
        "shading": art.shading,
        "brightness_threshold": art.brightness_threshold,
        "cell_width": art.cell_width,
        "cell_height": art.cell_height,
        "workers": art.workers,
    }

    # network
    n = c["network"]
    n["user_agent"] = str(n.get("user_agent") or DEFAULT_CONFIG["network"]["user_agent"])
    n["connect_timeout_s"] = _coerce_num(n.get("connect_timeout_s"), 5.0, (0.2, 60.0))
    n["read_timeout_s"]    = _coerce_num(n.get("read_timeout_s"), 15.0, (0.5, 120.0))
    n["retries"]           = _coerce_int(n.get("retries"), 2, (0, 10))

    # render
    r = c["render"]
    if r.get("format") not in RENDER_FORMATS:
        r["format"] = DEFAULT_CONFIG["render"]["format"]
    r["color"] = _coerce_bool(r.get("color"), DEFAULT_CONFIG["render"]["color"])

    # logging
    lg = c["logging"]
    level = str(lg.get("level") or "").upper()
    if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"):
        level = DEFAULT_CONFIG["logging"]["level"]
    lg["level"] = level
    lg["http_debug"] = _coerce_bool(lg.get("http_debug"), DEFAULT_CONFIG["logging"]["http_debug"])
    lf = lg.get("file")
    lg["file"] = str(lf) if lf else None
    lg["rotate_bytes"] = _coerce_int(lg.get("rotate_bytes"), DEFAULT_CONFIG["logging"]["rotate_bytes"], (256 * 1024, 50 * 1024 * 1024))
    lg["rotate_keep"]  = _coerce_int(lg.get("rotate_keep"), DEFAULT_CONFIG["logging"]["rotate_keep"], (0, 50))

    return c

# ----------------------------
# Public API
# ----------------------------

@dataclass
class Config:
    """Thin wrapper around a nested dict with load/merge."""
    data: Dict[str, Any] = field(default_factory=lambda: _validate({}))
    path: str = field(default_factory=_default_config_path)

    # --- Mapping-style access
    def __getitem__(self, k: str) -> Any:
        return self.data[k]

    def get(self, k: str, default: Any = None) -> Any:
        return self.data.get(k, default)

    # --- Ops
    @classmethod
    def load(cls, path: Optional[str] = None) -> "Config":
        cfg_path = os.path.expanduser(path) if path else _default_config_path()
        if not os.path.exists(cfg_path):
            log.debug("No config at %s, using defaults", cfg_path)
            return cls(_validate({}), cfg_path)

        try:
            with open(cfg_path, "r", encoding="utf-8") as f:
                user_cfg = json.load(f)
            if not isinstance(user_cfg, dict):
                raise ValueError("top-level JSON value is not an object")
        except (OSError, ValueError) as exc:
            # Corrupt file. Backup and fall back to defaults.
            backup = cfg_path + ".corrupt.bak"
            log.warning("Config %s unreadable (%s); backed up to %s", cfg_path, exc, backup)
            try:
                shutil.copyfile(cfg_path, backup)
            except OSError:
                log.warning("Could not back up %s", cfg_path)
            user_cfg = {}

        return cls(_validate(user_cfg), cfg_path)

    def update(self, partial: Dict[str, Any]) -> None:
        """Deep-merge a partial config then validate."""
        merged = _deep_merge(self.data, partial)
        self.data = _validate(merged)

    def art_config(self) -> ArtConfig:
        return make_art_config(self.data["art"])

    # Convenience getters
    @property
    def render_format(self) -> str:
        return self.data["render"]["format"]


__all__ = [
    "ArtConfig",
    "Config",
    "DEFAULT_CONFIG",
    "DEFAULT_BRIGHTNESS_THRESHOLD",
    "DEFAULT_CELL_HEIGHT",
    "DEFAULT_CELL_WIDTH",
    "RENDER_FORMATS",
    "make_art_config",
]
