"""Config API: GET plans, POST reload."""

from typing import Any

from fastapi import APIRouter

from rxreturns.errors import NotFoundError, ValidationError
from rxreturns.models.outputs import success
from rxreturns.plans import get_all_plans, get_plan, reload_config

router = APIRouter(prefix="/config", tags=["config"])


@router.get("/plans")
async def list_plans_config() -> dict[str, Any]:
    """Return full plans config as JSON."""
    return success(get_all_plans())


@router.post("/plans/reload")
async def reload_plans_config() -> dict[str, Any]:
    """Hot-reload plans from disk; a missing or invalid file is a 400."""
    try:
        config = reload_config()
    except (FileNotFoundError, ValueError) as e:
        raise ValidationError(str(e)) from e
    return success({"reloaded": True, "plans": sorted(config.get("plans") or {})})


@router.get("/plans/{plan_id}")
async def get_plan_config(plan_id: str) -> dict[str, Any]:
    """Return one plan's caps and pricing."""
    try:
        return success(get_plan(plan_id))
    except ValueError as e:
        raise NotFoundError(str(e)) from e
