"""
➡️ But : Centraliser les dépendances réutilisables des routes.

Exemples :

get_auth_service() : crée un AuthService à partir du vault et du TokenService.

get_current_username() : la « porte » d'autorisation. Lit le bearer token,
le valide, et rattache l'identité à la requête (request.state.username).

🔹 Avantages :

Routes plus propres (pas de code dupliqué).

L'identité vient uniquement du token validé, jamais du corps ni de la query.
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.db.repositories.todos import TodoStore
from app.db.repositories.users import CredentialVault
from app.db.session import Storage, get_storage
from app.features.authentication.services import AuthService, UNAUTHORIZED_HEADERS
from app.features.todos.services import TodoService
from app.security.tokens import TokenService


# -----------------------------
# Repositories
# -----------------------------
def get_vault(storage: Storage = Depends(get_storage)) -> CredentialVault:
    return storage.vault

def get_store(storage: Storage = Depends(get_storage)) -> TodoStore:
    return storage.store


# -----------------------------
# Tokens
# -----------------------------
def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


# -----------------------------
# Auth
# -----------------------------
def get_auth_service(
    vault: CredentialVault = Depends(get_vault),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(vault=vault, tokens=tokens)


# -----------------------------
# Authentication data
# -----------------------------
bearer_scheme = HTTPBearer(auto_error=False)

def get_access_token_from_bearer(
    credentials: HTTPAuthorizationCredentials | None = Security(bearer_scheme),
) -> str:
    if not credentials or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers=UNAUTHORIZED_HEADERS,
        )
    return credentials.credentials


def get_current_username(
    request: Request,
    access_token: str = Depends(get_access_token_from_bearer),
    svc: AuthService = Depends(get_auth_service),
) -> str:
    username = svc.authenticate(access_token)
    request.state.username = username
    return username


# -----------------------------
# Todos
# -----------------------------
def get_todo_service(
    store: TodoStore = Depends(get_store),
    username: str = Depends(get_current_username),
) -> TodoService:
    return TodoService(store, username)
