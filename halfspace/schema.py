import math
from typing import Dict, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator


class InvalidConfiguration(ValueError):
    """Raised when a detector is constructed with unusable parameters."""


class DetectorConfig(BaseModel):
    n_trees: int = Field(default=10, gt=0)
    height: int = Field(default=8, gt=0)
    window_size: int = Field(default=250, gt=0)
    limits: Optional[Dict[str, Tuple[float, float]]] = None
    padding: float = Field(default=0.15, gt=0.0, lt=0.5)
    seed: Optional[int] = None

    @field_validator("limits")
    @classmethod
    def limits_non_degenerate(cls, v: Optional[Dict[str, Tuple[float, float]]]):
        if v is None:
            return v
        for feature, (lo, hi) in v.items():
            if not (math.isfinite(lo) and math.isfinite(hi)):
                raise ValueError(f"limits for {feature!r} must be finite")
            # A zero-width range leaves no room to sample a threshold
            if not lo < hi:
                raise ValueError(f"limits for {feature!r} must satisfy low < high, got ({lo}, {hi})")
        return v


def validate_config(**params) -> DetectorConfig:
    try:
        return DetectorConfig(**params)
    except ValidationError as e:
        raise InvalidConfiguration(str(e)) from e
