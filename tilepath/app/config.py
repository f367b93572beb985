# tilepath/app/config.py
#!/usr/bin/env python3
"""
Viewer settings.

Resolution order: defaults < environment (TILEPATH_*) < CLI (--key=value).
"""

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from tilepath.core.types import Coordinate

# shipped as package data next to tilepath/core and tilepath/app
MAP_DIR = Path(__file__).resolve().parents[1] / "maps"
DEFAULT_MAP = MAP_DIR / "28x37.txt"


@dataclass(frozen=True)
class ViewerConfig:
    map_path: Path = DEFAULT_MAP
    grid_width: int = 28       # tiles
    grid_height: int = 37      # tiles
    block_size: int = 20       # px per tile
    fps: int = 30
    step_ms: int = 100         # delay between mover steps
    mover_start: Coordinate = (1, 4)

    @property
    def map_dimensions(self) -> Tuple[Optional[int], Optional[int]]:
        """Expected (width, height) for the bundled map; custom maps take their size from the file."""
        if self.map_path == DEFAULT_MAP:
            return (self.grid_width, self.grid_height)
        return (None, None)


_ENV_KEYS = {
    "TILEPATH_MAP": "map",
    "TILEPATH_FPS": "fps",
    "TILEPATH_STEP_MS": "step-ms",
}

_INT_FIELDS = {
    "fps": "fps",
    "step-ms": "step_ms",
    "block-size": "block_size",
}


def _parse_positive_int(option: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"--{option} expects an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"--{option} must be positive, got {value}")
    return value


def _collect(argv: List[str], environ: Mapping[str, str]) -> Dict[str, str]:
    raw: Dict[str, str] = {}
    for env_key, option in _ENV_KEYS.items():
        if environ.get(env_key):
            raw[option] = environ[env_key]
    for arg in argv:
        if arg.startswith("--") and "=" in arg:
            key, value = arg[2:].split("=", 1)
            raw[key.lower()] = value
    return raw


def resolve_config(argv: Optional[List[str]] = None, environ: Optional[Mapping[str, str]] = None) -> ViewerConfig:
    argv = list(argv or [])
    environ = environ if environ is not None else {}
    raw = _collect(argv, environ)

    overrides = {}
    if "map" in raw:
        overrides["map_path"] = Path(raw["map"])
    for option, attr in _INT_FIELDS.items():
        if option in raw:
            overrides[attr] = _parse_positive_int(option, raw[option])
    return replace(ViewerConfig(), **overrides)
