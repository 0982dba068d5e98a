from fastapi import APIRouter, Depends, status

from app.api.v1.dependencies import get_auth_service
from app.features.authentication.services import AuthService
from app.features.authentication.schemas import CredentialsIn, MessageOut, TokenOut

router = APIRouter(
    tags=["auth"],
)

# -----------------------------
# Register
# -----------------------------
@router.post(
    "/register",
    summary="Créer un compte",
    status_code=status.HTTP_201_CREATED,
    response_model=MessageOut,
    responses={
        400: {"description": "Nom d'utilisateur ou mot de passe manquant"},
        409: {"description": "Nom d'utilisateur déjà pris"},
    },
)
def register(payload: CredentialsIn, svc: AuthService = Depends(get_auth_service)):
    return svc.register(payload)

# -----------------------------
# Login
# -----------------------------
@router.post(
    "/login",
    summary="Se connecter",
    description="Retourne un token de session signé (24 h par défaut).",
    response_model=TokenOut,
    responses={401: {"description": "Identifiants invalides"}},
)
def login(payload: CredentialsIn, svc: AuthService = Depends(get_auth_service)):
    return svc.login(payload)
