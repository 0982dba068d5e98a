"""
➡️ But : assembler toutes les pièces du puzzle.

Crée l'instance FastAPI (app).

Configure :

CORS (autorisations de qui peut appeler ces API)

titre, version, tags

schéma OpenAPI personnalisé

erreurs de validation -> 400

Inclut les routers (/register, /login, /todos).

Au démarrage (lifespan), construit dans l'ordre : settings, logs, TokenService,
vault et store. Aucune requête n'est servie avant la fin de cette étape ;
sans JWT_SECRET_KEY le démarrage échoue.

🔹 Avantages :

Centralise la configuration du serveur HTTP.

Point unique d'exécution : uvicorn app.main:app --reload.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.core.config import build_jwt_settings, get_settings
from app.core.logging import configure_logging
from app.core.openapi import custom_openapi
from app.db.session import init_storage
from app.security.tokens import TokenService

from app.api.v1.routers import authentication, todos

import uvicorn

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    app.state.token_service = TokenService(build_jwt_settings(settings))
    app.state.storage = init_storage(settings)
    logger.info("%s started (env=%s)", settings.APP_NAME, settings.ENV)
    yield
    logger.info("%s stopped", settings.APP_NAME)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Corps absent, JSON invalide ou champ manquant : 400 plutôt que 422
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="Todo-Back",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "Inscription et connexion"},
            {"name": "todos", "description": "Tâches de l'utilisateur courant"},
        ],
    )

    # CORS (ajustez selon vos besoins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"], allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    # Routers
    app.include_router(authentication.router)
    app.include_router(todos.router)

    @app.get("/health", tags=["health"])
    def health():
        return {"status": "ok"}

    # Génération du schéma OpenAPI custom
    app.openapi = lambda: custom_openapi(app)
    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("app.main:app", host="127.0.0.1", port=8080)  # http://localhost:8080
