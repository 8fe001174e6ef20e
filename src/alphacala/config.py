"""Engine settings for AlphaCala, overridable from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .game import AC_PITS, OPP_PITS, START_SEEDS

DEFAULT_DEPTH = 10


def _read_int(env: Mapping[str, str], name: str, default: int, minimum: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise ValueError(f"{name} must be at least {minimum}, got {value}")
    return value


@dataclass(frozen=True)
class EngineConfig:
    depth: int = DEFAULT_DEPTH
    start_seeds: int = START_SEEDS
    ac_pits: Tuple[int, ...] = AC_PITS
    opp_pits: Tuple[int, ...] = OPP_PITS

    @staticmethod
    def from_env(env: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        env = os.environ if env is None else env
        return EngineConfig(
            depth=_read_int(env, "ALPHACALA_DEPTH", DEFAULT_DEPTH, 1),
            start_seeds=_read_int(env, "ALPHACALA_START_SEEDS", START_SEEDS, 1),
        )
