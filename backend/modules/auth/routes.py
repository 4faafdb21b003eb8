"""
Authentication API endpoints.

Registration, WhatsApp OTP login, admin login, identity and logout.
Sessions are carried in httpOnly cookies set by these handlers.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Cookie, Depends, HTTPException, Response

from api.dependencies import get_auth_service
from modules.messaging import MessageDeliveryError
from modules.sessions import (
    ADMIN_SESSION_COOKIE,
    ADMIN_SESSION_MAX_AGE_MS,
    USER_SESSION_COOKIE,
    USER_SESSION_MAX_AGE_MS,
)
from shared.config import Settings, get_settings
from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)

from .interfaces import IAuthService
from .models import (
    AdminLoginRequest,
    IdentityResponse,
    InitiateLoginRequest,
    RegisterRequest,
    ResendCodeRequest,
    SessionResult,
    VerifyLoginRequest,
    VerifyRegistrationRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def set_session_cookie(
    response: Response,
    name: str,
    token: str,
    max_age_ms: int,
    settings: Settings,
) -> None:
    response.set_cookie(
        key=name,
        value=token,
        max_age=max_age_ms // 1000,
        httponly=True,
        secure=not settings.debug,
        samesite="lax",
        path="/",
    )


def _session_payload(result: SessionResult, message: str) -> dict:
    return {
        "success": True,
        "message": message,
        "user": result.user.public_dict(),
        "is_new_user": result.is_new_user,
    }


@router.post("/register")
async def register(
    request: RegisterRequest,
    service: IAuthService = Depends(get_auth_service),
) -> dict:
    """
    Create a trial account and send a verification code over WhatsApp.

    A failure to deliver the code does not undo the registration.
    """
    try:
        result = await service.register(request.name, request.email, request.phone)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=e.message)

    return {
        "success": True,
        "message": "Usuário cadastrado. Verifique o código enviado via WhatsApp.",
        "user": result.user.public_dict(),
        "verification_id": result.verification_id,
        "code_sent": result.code_sent,
    }


@router.post("/verify-registration")
async def verify_registration(
    request: VerifyRegistrationRequest,
    response: Response,
    service: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> dict:
    try:
        result = await service.verify_registration(request.phone, request.code)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except (AuthenticationError, NotFoundError) as e:
        raise HTTPException(status_code=401, detail=e.message)

    set_session_cookie(
        response, USER_SESSION_COOKIE, result.session_token, USER_SESSION_MAX_AGE_MS, settings
    )
    return _session_payload(result, "Cadastro verificado com sucesso")


@router.post("/resend")
async def resend_code(
    request: ResendCodeRequest,
    service: IAuthService = Depends(get_auth_service),
) -> dict:
    """Issue a new code; the previous one can no longer be used."""
    try:
        challenge = await service.resend_code(request.phone, request.purpose, request.name)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except MessageDeliveryError as e:
        logger.error("Resend failed: %s", e.message)
        raise HTTPException(status_code=502, detail="Erro ao enviar código via WhatsApp")

    return {"success": True, **challenge.model_dump()}


@router.post("/whatsapp/initiate")
async def initiate_whatsapp_login(
    request: InitiateLoginRequest,
    service: IAuthService = Depends(get_auth_service),
) -> dict:
    """Send a 5-minute login code. The response never contains the code."""
    try:
        challenge = await service.initiate_login(request.name, request.phone)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except MessageDeliveryError as e:
        logger.error("Login code delivery failed: %s", e.message)
        raise HTTPException(status_code=502, detail="Erro ao enviar código via WhatsApp")

    return {"success": True, **challenge.model_dump()}


@router.post("/whatsapp/verify")
async def verify_whatsapp_login(
    request: VerifyLoginRequest,
    response: Response,
    service: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> dict:
    try:
        result = await service.verify_login(request.verification_id, request.code)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=e.message)

    set_session_cookie(
        response, USER_SESSION_COOKIE, result.session_token, USER_SESSION_MAX_AGE_MS, settings
    )
    return _session_payload(result, "Login realizado com sucesso")


@router.get("/me", response_model=IdentityResponse)
async def get_me(
    session_token: Optional[str] = Cookie(default=None, alias=USER_SESSION_COOKIE),
    admin_session_token: Optional[str] = Cookie(default=None, alias=ADMIN_SESSION_COOKIE),
    service: IAuthService = Depends(get_auth_service),
) -> IdentityResponse:
    """Who is calling. Bad or expired cookies read as anonymous."""
    return await service.get_identity(session_token, admin_session_token)


@router.post("/logout")
async def logout(response: Response) -> dict:
    response.delete_cookie(USER_SESSION_COOKIE, path="/")
    response.delete_cookie(ADMIN_SESSION_COOKIE, path="/")
    return {"success": True, "message": "Logout realizado com sucesso"}


@router.post("/admin/login")
async def admin_login(
    request: AdminLoginRequest,
    response: Response,
    service: IAuthService = Depends(get_auth_service),
    settings: Settings = Depends(get_settings),
) -> dict:
    try:
        token = await service.admin_login(request.email, request.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=e.message)

    set_session_cookie(response, ADMIN_SESSION_COOKIE, token, ADMIN_SESSION_MAX_AGE_MS, settings)
    return {"success": True, "message": "Login de administrador realizado com sucesso"}
