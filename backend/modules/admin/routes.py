"""
Admin API endpoints.

Every route requires a signed admin session.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_admin_service
from api.middleware.auth import require_admin
from shared.exceptions import NotFoundError, ValidationError

from .interfaces import IAdminService
from .models import (
    CreatePlanRequest,
    SettingsUpdateRequest,
    StatsActionRequest,
    UpdatePlanRequest,
)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/plans")
async def list_plans(service: IAdminService = Depends(get_admin_service)) -> dict:
    plans = await service.list_plans()
    return {"success": True, "plans": [p.model_dump(mode="json") for p in plans]}


@router.post("/plans")
async def create_plan(
    request: CreatePlanRequest,
    service: IAdminService = Depends(get_admin_service),
) -> dict:
    try:
        plan = await service.create_plan(request)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return {
        "success": True,
        "plan": plan.model_dump(mode="json"),
        "message": "Plano criado com sucesso",
    }


@router.put("/plans")
async def update_plan(
    request: UpdatePlanRequest,
    service: IAdminService = Depends(get_admin_service),
) -> dict:
    try:
        plan = await service.update_plan(request)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return {
        "success": True,
        "plan": plan.model_dump(mode="json"),
        "message": "Plano atualizado com sucesso",
    }


@router.delete("/plans")
async def deactivate_plan(
    id: Optional[str] = Query(default=None),
    service: IAdminService = Depends(get_admin_service),
) -> dict:
    try:
        await service.deactivate_plan(id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return {"success": True, "message": "Plano desativado com sucesso"}


@router.get("/settings")
async def get_settings(service: IAdminService = Depends(get_admin_service)) -> dict:
    return {"success": True, "settings": await service.get_settings()}


@router.put("/settings")
async def update_settings(
    request: SettingsUpdateRequest,
    service: IAdminService = Depends(get_admin_service),
) -> dict:
    try:
        await service.update_settings(request.settings)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return {"success": True, "message": "Configurações atualizadas com sucesso"}


@router.get("/stats")
async def get_stats(service: IAdminService = Depends(get_admin_service)) -> dict:
    stats = await service.get_stats()
    return stats.model_dump(by_alias=True)


@router.post("/stats")
async def run_stats_action(
    request: StatsActionRequest,
    service: IAdminService = Depends(get_admin_service),
) -> dict:
    try:
        message = await service.run_action(request.action)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return {"success": True, "message": message}
