"""Subscription plan registry: loads tiers from YAML and resolves a pharmacy's distributor cap."""

import os
from pathlib import Path
from typing import Any, Optional

import yaml

from rxreturns.config import DEFAULT_PLAN_ID, PLANS_CONFIG_PATH
from rxreturns.utils.logger import get_logger

logger = get_logger("rxreturns.plans")

_config: dict[str, Any] | None = None

_CAP_KEYS = ("max_distributors", "max_documents")


def _get_config_path() -> Path:
    raw = os.environ.get("PLANS_CONFIG_PATH", "").strip()
    if raw:
        return Path(raw)
    return PLANS_CONFIG_PATH


def _load_config() -> dict[str, Any]:
    global _config
    if _config is not None:
        return _config
    path = _get_config_path()
    if not path.exists():
        raise FileNotFoundError(
            f"Plans config not found: {path}. Set PLANS_CONFIG_PATH or create config/plans.yaml."
        )
    try:
        raw = path.read_text(encoding="utf-8")
        loaded = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in plans config {path}: {e}") from e
    if not isinstance(loaded, dict):
        raise ValueError(f"Plans config must be a YAML object (dict), got {type(loaded)}")
    _validate_config(loaded)
    _config = loaded
    logger.info("plans.config_loaded", path=str(path), plan_count=len(loaded.get("plans", {})))
    return _config


def _validate_config(config: dict[str, Any]) -> None:
    """Each plan must be a mapping whose caps are null or non-negative integers."""
    plans = config.get("plans")
    if not isinstance(plans, dict) or not plans:
        raise ValueError("Plans config must define a non-empty 'plans' mapping")
    for plan_id, plan_cfg in plans.items():
        if not isinstance(plan_cfg, dict):
            raise ValueError(f"Plan {plan_id!r} must be a dict")
        for key in _CAP_KEYS:
            value = plan_cfg.get(key)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"Plan {plan_id!r}: {key} must be null or a non-negative integer, got {value!r}")
    default_plan = config.get("default_plan")
    if default_plan is not None and default_plan not in plans:
        raise ValueError(f"default_plan {default_plan!r} is not a defined plan. Known: {list(plans)}")


def reload_config() -> dict[str, Any]:
    """Force-reload plans from disk (for hot-reload via API)."""
    global _config
    _config = None
    return _load_config()


def get_all_plans() -> dict[str, Any]:
    """Return the full parsed config (for API)."""
    return dict(_load_config())


def get_plan(plan_id: str) -> dict[str, Any]:
    """Return one plan's config with its id included."""
    plans = _load_config().get("plans") or {}
    if plan_id not in plans:
        raise ValueError(f"Unknown plan {plan_id!r}. Known: {list(plans)}")
    return {"id": plan_id, **plans[plan_id]}


def resolve_plan(plan_id: Optional[str]) -> dict[str, Any]:
    """Plan for a pharmacy; falls back to the configured default when unset or unknown."""
    config = _load_config()
    plans = config.get("plans") or {}
    if plan_id and plan_id in plans:
        return get_plan(plan_id)
    if plan_id:
        logger.warning("plans.unknown_plan_fallback", plan_id=plan_id)
    fallback = config.get("default_plan") or DEFAULT_PLAN_ID
    return get_plan(fallback)


def max_distributors_for(plan_id: Optional[str]) -> Optional[int]:
    """Monthly distinct-distributor cap for the plan; None means unlimited."""
    return resolve_plan(plan_id).get("max_distributors")
