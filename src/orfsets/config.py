"""
Run options for the three dataset commands.

Values are merged in this order, later wins: per-command defaults, the
optional YAML file (flat keys, plus an optional section named after the
command), then options given on the command line.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Mapping, Optional

import yaml

from .errors import ConfigError
from .samplers import MIN_REGION_WIDTH, SAMPLERS

COMMAND_DEFAULTS: Dict[str, Dict[str, object]] = {
    "strain": {"num": 2, "fuzz": 2.0},
    "stest": {"fuzz": 0.0},
    "otrain": {"num": 3, "fuzz": 2.0},
}

# YAML key -> RunConfig field
CONFIG_KEYS = {
    "left": "num_left",
    "right": "num_right",
    "num": "num",
    "width": "width",
    "fuzz": "fuzz",
    "seed": "seed",
    "output": "output",
    "summary": "summary",
    "log_file": "log_file",
    "verbose": "verbose",
}


@dataclass
class RunConfig:
    command: str
    input: str
    num_left: int = 52
    num_right: int = 20
    num: int = 2
    width: int = 5000
    fuzz: float = 2.0
    seed: Optional[int] = None
    output: Optional[str] = None
    summary: Optional[str] = None
    log_file: Optional[str] = None
    verbose: bool = False

    def validate(self) -> "RunConfig":
        if self.command not in SAMPLERS:
            raise ConfigError(f"Invalid command {self.command}")
        if self.num_left < 0:
            raise ConfigError("Left positions must be non-negative.")
        if self.num_right < 0:
            raise ConfigError("Right positions must be non-negative.")
        if self.command in ("strain", "otrain") and self.num < 1:
            what = "pegs per genome" if self.command == "strain" else "regions"
            raise ConfigError(f"Number of {what} must be greater than 0.")
        if self.command == "otrain" and self.width < MIN_REGION_WIDTH:
            raise ConfigError(f"Region width must be at least {MIN_REGION_WIDTH}.")
        if self.fuzz < 0:
            raise ConfigError("Fuzz factor must be non-negative.")
        return self

    def to_dict(self) -> Dict[str, object]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def load_config_file(path: str | Path) -> Dict[str, object]:
    p = Path(path)
    if not p.is_file():
        raise ConfigError(f"Config file {p} not found.")
    try:
        cfg = yaml.safe_load(p.read_text()) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config at {p} is not valid YAML: {exc}") from exc
    if not isinstance(cfg, dict):
        raise ConfigError(f"Config at {p} must be a mapping.")
    return cfg


def _file_values(command: str, cfg: Mapping[str, object]) -> Dict[str, object]:
    out: Dict[str, object] = {}
    section = cfg.get(command) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Config section {command!r} must be a mapping.")
    for source in (cfg, section):
        for key, value in source.items():
            if key in SAMPLERS:
                continue
            if key not in CONFIG_KEYS:
                raise ConfigError(f"Unknown config key {key!r}.")
            out[CONFIG_KEYS[key]] = value
    return out


def _coerce(values: Dict[str, object]) -> Dict[str, object]:
    casts = {"num_left": int, "num_right": int, "num": int, "width": int, "fuzz": float, "verbose": bool}
    out = dict(values)
    try:
        for key, cast in casts.items():
            if out.get(key) is not None:
                out[key] = cast(out[key])
        if out.get("seed") is not None:
            out["seed"] = int(out["seed"])
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Bad option value: {exc}") from exc
    return out


def build_config(
    command: str,
    input_path: str,
    overrides: Optional[Mapping[str, object]] = None,
    config_file: Optional[str | Path] = None,
) -> RunConfig:
    """Merge defaults, YAML and explicit options into a validated RunConfig.

    ``overrides`` uses RunConfig field names; ``None`` values are ignored.
    """
    if command not in COMMAND_DEFAULTS:
        raise ConfigError(f"Invalid command {command}")
    values: Dict[str, object] = dict(COMMAND_DEFAULTS[command])
    if config_file:
        values.update(_file_values(command, load_config_file(config_file)))
    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value
    if command == "stest":
        # test sets are never down-sampled
        values["fuzz"] = 0.0
    return RunConfig(command=command, input=str(input_path), **_coerce(values)).validate()


__all__ = ["COMMAND_DEFAULTS", "RunConfig", "build_config", "load_config_file"]
