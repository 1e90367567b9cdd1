from typing import Optional
from fastapi import APIRouter, Cookie, Depends, Header, Response, status
from fastapi.responses import RedirectResponse
from dependency_injector.wiring import inject, Provide

from ferreteria.app_containers import ApplicationContainer
from ferreteria.core.logger import logger
from ferreteria.core.security.deps import token_from
from ferreteria.core.security.session import SessionManager
from ferreteria.core.settings import settings

from ferreteria.v1_0.entities import SessionDTO
from ferreteria.v1_0.schemas import LoginIn
from ferreteria.v1_0.services import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=SessionDTO,
    status_code=status.HTTP_200_OK,
    summary="Open an admin session",
)
@inject
async def login(
    payload: LoginIn,
    response: Response,
    auth_service: AuthService = Depends(
        Provide[ApplicationContainer.api_container.auth_service]
    ),
    sessions: SessionManager = Depends(
        Provide[ApplicationContainer.api_container.session_manager]
    ),
) -> SessionDTO:
    logger.info("[AuthRouter] login user=%s", payload.username)
    token = auth_service.login(payload.username, payload.password.get_secret_value())
    sessions.attach(response, token)
    return auth_service.describe(token)


@router.get(
    "/session",
    response_model=SessionDTO,
    summary="Current session state",
)
@inject
async def current_session(
    authorization: Optional[str] = Header(None),
    session: Optional[str] = Cookie(None, alias=settings.SESSION_COOKIE),
    auth_service: AuthService = Depends(
        Provide[ApplicationContainer.api_container.auth_service]
    ),
) -> SessionDTO:
    return auth_service.describe(token_from(authorization, session))


@router.post(
    "/logout",
    status_code=status.HTTP_303_SEE_OTHER,
    summary="Close the session and go back to the root",
)
@inject
async def logout(
    sessions: SessionManager = Depends(
        Provide[ApplicationContainer.api_container.session_manager]
    ),
) -> RedirectResponse:
    logger.info("[AuthRouter] logout")
    response = RedirectResponse(url="/", status_code=status.HTTP_303_SEE_OTHER)
    sessions.logout(response)
    return response
