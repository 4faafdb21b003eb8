"""
User profile endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_auth_service
from api.middleware.auth import require_user
from shared.exceptions import ConflictError, NotFoundError, ValidationError
from shared.models import AuthenticatedUser

from .interfaces import IAuthService
from .models import UpdateProfileRequest

router = APIRouter()


@router.put("/update-profile")
async def update_profile(
    request: UpdateProfileRequest,
    user: AuthenticatedUser = Depends(require_user),
    service: IAuthService = Depends(get_auth_service),
) -> dict:
    """Update the caller's own name, email and (optionally) phone."""
    try:
        updated = await service.update_profile(user.id, request.name, request.email, request.phone)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ConflictError:
        raise HTTPException(status_code=400, detail="Este email já está em uso")
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    return {
        "success": True,
        "message": "Perfil atualizado com sucesso",
        "user": updated.public_dict(),
    }
