# artvista/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException

from artvista.api.deps import get_auth_service, get_current_user
from artvista.domain.errors import AppError
from artvista.domain.schemas import AuthOut, LoginIn, MeOut, RegisterIn
from artvista.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=AuthOut, status_code=201)
def register(payload: RegisterIn, svc: AuthService = Depends(get_auth_service)):
    try:
        return svc.register(payload.name, payload.email, payload.password)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/login", response_model=AuthOut)
def login(payload: LoginIn, svc: AuthService = Depends(get_auth_service)):
    try:
        return svc.login(payload.email, payload.password)
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/me", response_model=MeOut)
def me(
    current_user: dict = Depends(get_current_user),
    svc: AuthService = Depends(get_auth_service),
):
    try:
        return svc.me(current_user["id"])
    except AppError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
