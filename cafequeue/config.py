"""Configuration loading for the order queue (YAML or JSON)."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields, is_dataclass
from pathlib import Path
from typing import Dict

import yaml


@dataclass
class PriorityWeights:
    wait: float = 40.0
    complexity: float = 25.0
    loyalty: float = 10.0
    urgency: float = 25.0
    wait_saturation_minutes: float = 10.0
    urgency_window_minutes: float = 2.0
    fairness_free_skips: int = 3
    fairness_penalty_per_skip: float = 2.0
    emergency_boost: float = 50.0
    emergency_after_minutes: float = 8.0
    live_cap: float = 100.0
    simulation_cap: float = 150.0


@dataclass
class WorkloadPolicy:
    overloaded_ratio: float = 1.2
    underloaded_ratio: float = 0.8
    quick_prep_minutes: float = 3.0
    complex_prep_minutes: float = 4.0


@dataclass
class ArrivalSettings:
    rate_per_minute: float = 1.4
    # "approximate" keeps round(-ln(1-U) * rate); "knuth" is an exact Poisson draw
    sampler: str = "approximate"
    customer_mix: Dict[str, float] = field(
        default_factory=lambda: {"PREMIUM": 0.2, "REGULAR": 0.6, "NEW": 0.2}
    )
    rush_burst_min: int = 5
    rush_burst_max: int = 8


@dataclass
class RushHourSettings:
    orders: int = 100
    horizon_minutes: float = 180.0
    step_minutes: float = 0.5
    complaint_threshold_minutes: float = 10.0
    customer_mix: Dict[str, float] = field(
        default_factory=lambda: {"PREMIUM": 0.2, "REGULAR": 0.5, "NEW": 0.3}
    )


@dataclass
class QueueConfig:
    baristas: int = 3
    seed: int | None = None
    default_mode: str = "SMART"
    weights: PriorityWeights = field(default_factory=PriorityWeights)
    workload: WorkloadPolicy = field(default_factory=WorkloadPolicy)
    arrivals: ArrivalSettings = field(default_factory=ArrivalSettings)
    rush_hour: RushHourSettings = field(default_factory=RushHourSettings)

    def to_dict(self) -> Dict:
        return asdict(self)


def _build(cls, raw: Dict):
    """Instantiate a (nested) config dataclass from a plain mapping."""
    known = {f.name: f for f in fields(cls)}
    unknown = set(raw) - set(known)
    if unknown:
        raise ValueError(f"Unknown {cls.__name__} keys: {sorted(unknown)}")
    kwargs = {}
    defaults = cls()
    for name, value in raw.items():
        current = getattr(defaults, name)
        if is_dataclass(current):
            if not isinstance(value, dict):
                raise ValueError(f"{cls.__name__}.{name} must be a mapping")
            value = _build(type(current), value)
        kwargs[name] = value
    return cls(**kwargs)


def _check_mix(label: str, mix: Dict[str, float]) -> None:
    valid = {"PREMIUM", "REGULAR", "NEW"}
    bad = {str(k).upper() for k in mix} - valid
    if bad:
        raise ValueError(f"{label} has unknown customer types: {sorted(bad)}")
    if any(float(v) < 0 for v in mix.values()):
        raise ValueError(f"{label} has negative weights")
    total = sum(float(v) for v in mix.values())
    if abs(total - 1.0) > 1e-6:
        raise ValueError(f"{label} must sum to 1.0 (got {total:.3f})")


def validate_config(cfg: QueueConfig) -> QueueConfig:
    """
    Validate a configuration.

    Raises:
        ValueError: If any value is out of range
    """
    if cfg.baristas < 1:
        raise ValueError("baristas must be at least 1")
    if cfg.default_mode.upper() not in {"FIFO", "SMART"}:
        raise ValueError(f"Unknown default_mode: {cfg.default_mode}")

    w = cfg.weights
    for name in ("wait", "complexity", "loyalty", "urgency", "fairness_penalty_per_skip", "emergency_boost"):
        if getattr(w, name) < 0:
            raise ValueError(f"weights.{name} must be non-negative")
    if w.wait_saturation_minutes <= 0 or w.urgency_window_minutes <= 0:
        raise ValueError("weights time windows must be positive")
    if w.simulation_cap < w.live_cap:
        raise ValueError("weights.simulation_cap must be >= weights.live_cap")

    wl = cfg.workload
    if not 0 < wl.underloaded_ratio <= 1.0 <= wl.overloaded_ratio:
        raise ValueError("workload ratios must satisfy 0 < underloaded <= 1 <= overloaded")

    a = cfg.arrivals
    if a.rate_per_minute < 0:
        raise ValueError("arrivals.rate_per_minute must be non-negative")
    if a.sampler not in {"approximate", "knuth"}:
        raise ValueError(f"Unknown arrivals.sampler: {a.sampler}")
    if not 0 <= a.rush_burst_min <= a.rush_burst_max:
        raise ValueError("arrivals rush burst bounds are inconsistent")
    _check_mix("arrivals.customer_mix", a.customer_mix)

    r = cfg.rush_hour
    if r.orders < 1:
        raise ValueError("rush_hour.orders must be at least 1")
    if r.horizon_minutes <= 0 or r.step_minutes <= 0:
        raise ValueError("rush_hour horizon and step must be positive")
    _check_mix("rush_hour.customer_mix", r.customer_mix)
    return cfg


def load_config(path: str | Path | None = None) -> QueueConfig:
    """
    Load configuration from a YAML or JSON file.

    Missing keys keep their defaults. ``None`` returns the defaults.
    """
    if path is None:
        return QueueConfig()
    path = Path(path)
    with open(path, "r", encoding="utf-8") as f:
        if path.suffix.lower() == ".json":
            raw = json.load(f)
        else:
            raw = yaml.safe_load(f)
    raw = raw or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return validate_config(_build(QueueConfig, raw))
