"""Tests for configuration loading and validation."""

import json
from pathlib import Path

import pytest

from cafequeue.config import QueueConfig, load_config, validate_config

REPO_CONFIG = Path(__file__).resolve().parents[1] / "cafequeue_config.yaml"


def test_defaults():
    cfg = load_config(None)
    assert cfg.baristas == 3
    assert cfg.weights.wait == 40
    assert cfg.rush_hour.horizon_minutes == 180.0
    assert cfg.arrivals.sampler == "approximate"


def test_yaml_overrides_keep_other_defaults(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("baristas: 5\nrush_hour:\n  orders: 40\n", encoding="utf-8")

    cfg = load_config(path)

    assert cfg.baristas == 5
    assert cfg.rush_hour.orders == 40
    assert cfg.rush_hour.step_minutes == 0.5
    assert cfg.weights.urgency == 25


def test_json_config(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"arrivals": {"sampler": "knuth", "rate_per_minute": 2.0}}), encoding="utf-8")

    cfg = load_config(path)

    assert cfg.arrivals.sampler == "knuth"
    assert cfg.arrivals.rate_per_minute == 2.0


def test_repo_sample_config_loads():
    cfg = load_config(REPO_CONFIG)
    assert cfg.seed == 42
    assert cfg.default_mode == "SMART"


@pytest.mark.parametrize(
    "text",
    [
        "unknown_key: 1\n",
        "weights:\n  speed: 3\n",
        "baristas: 0\n",
        "arrivals:\n  sampler: gaussian\n",
        "arrivals:\n  customer_mix:\n    PREMIUM: 0.5\n    REGULAR: 0.2\n",
        "rush_hour:\n  customer_mix:\n    VIP: 1.0\n",
        "workload:\n  overloaded_ratio: 0.9\n",
        "default_mode: lifo\n",
        "weights: 3\n",
        "- a\n- b\n",
    ],
)
def test_invalid_config_rejected(tmp_path, text):
    path = tmp_path / "bad.yaml"
    path.write_text(text, encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_validate_config_returns_config():
    cfg = QueueConfig()
    assert validate_config(cfg) is cfg
    assert cfg.to_dict()["workload"]["overloaded_ratio"] == 1.2
