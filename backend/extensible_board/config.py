from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

from .core.types import AddUnit

ANIMATION_DURATION_S = 0.3

ENV_H_UNIT = "EXTBOARD_H_UNIT"
ENV_V_UNIT = "EXTBOARD_V_UNIT"
ENV_H_LIMIT = "EXTBOARD_H_LIMIT"
ENV_V_LIMIT = "EXTBOARD_V_LIMIT"
ENV_ANIMATION_MS = "EXTBOARD_ANIMATION_MS"


@dataclass(frozen=True)
class BoardConfig:
    horizontal_add_unit: AddUnit = AddUnit(1, 1)
    vertical_add_unit: AddUnit = AddUnit(1, 1)
    horizontal_extend_limit: int = 0
    vertical_extend_limit: int = 0
    animation_duration_s: float = ANIMATION_DURATION_S

    def validate(self) -> "BoardConfig":
        for name in ("horizontal_add_unit", "vertical_add_unit"):
            unit = getattr(self, name)
            if unit.x < 1 or unit.y < 1:
                raise ValueError(f"{name} must be positive, got {unit.x}x{unit.y}")
        for name in ("horizontal_extend_limit", "vertical_extend_limit"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must not be negative")
        if self.animation_duration_s < 0:
            raise ValueError("animation_duration_s must not be negative")
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides: Any) -> "BoardConfig":
        env = os.environ if environ is None else environ
        cfg = cls()
        if env.get(ENV_H_UNIT):
            cfg = replace(cfg, horizontal_add_unit=AddUnit.parse(env[ENV_H_UNIT]))
        if env.get(ENV_V_UNIT):
            cfg = replace(cfg, vertical_add_unit=AddUnit.parse(env[ENV_V_UNIT]))
        if env.get(ENV_H_LIMIT):
            cfg = replace(cfg, horizontal_extend_limit=int(env[ENV_H_LIMIT]))
        if env.get(ENV_V_LIMIT):
            cfg = replace(cfg, vertical_extend_limit=int(env[ENV_V_LIMIT]))
        if env.get(ENV_ANIMATION_MS):
            cfg = replace(cfg, animation_duration_s=int(env[ENV_ANIMATION_MS]) / 1000.0)
        overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(cfg, **overrides).validate()
