from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import yaml
from dotenv import load_dotenv

from sipcalc.utils.sip_models import DEFAULT_SCENARIO_RATES, ScenarioRate


@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str

    default_return_rate_pct: float
    default_inflation_rate_pct: float
    default_step_up_pct: float

    scenario_rates: Tuple[ScenarioRate, ...] = field(default=DEFAULT_SCENARIO_RATES)


def _deep_get(d: Dict[str, Any], path: str, default=None):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def _parse_scenarios(raw: Any) -> Tuple[ScenarioRate, ...]:
    if not raw:
        return DEFAULT_SCENARIO_RATES
    rates: List[ScenarioRate] = [ScenarioRate.model_validate(item) for item in raw]
    return tuple(rates)


def load_settings(config_path: str = "config.yaml") -> Settings:
    """
    Loads config.yaml + overrides from .env/environment variables.
    """
    load_dotenv()  # loads .env into env vars

    cfg: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

    # Empty env vars count as "not set" so they can't blank out config.yaml.
    def _env_or_cfg(key: str, cfg_path: str, default):
        v = os.getenv(key)
        if v is None:
            return _deep_get(cfg, cfg_path, default)
        v = v.strip()
        return _deep_get(cfg, cfg_path, default) if v == "" else v

    env = _env_or_cfg("APP_ENV", "app.env", "dev")
    log_level = _env_or_cfg("LOG_LEVEL", "app.log_level", "INFO")

    default_return_rate_pct = float(_env_or_cfg("SIP_RETURN_RATE_PCT", "assumptions.return_rate_pct", 12))
    default_inflation_rate_pct = float(_env_or_cfg("SIP_INFLATION_RATE_PCT", "assumptions.inflation_rate_pct", 6))
    default_step_up_pct = float(_env_or_cfg("SIP_STEP_UP_PCT", "assumptions.step_up_pct", 10))

    scenario_rates = _parse_scenarios(_deep_get(cfg, "scenarios", None))

    return Settings(
        env=env,
        log_level=str(log_level).upper(),
        default_return_rate_pct=default_return_rate_pct,
        default_inflation_rate_pct=default_inflation_rate_pct,
        default_step_up_pct=default_step_up_pct,
        scenario_rates=scenario_rates,
    )


# Optional convenience singleton
SETTINGS = load_settings()
