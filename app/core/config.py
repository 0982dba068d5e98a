"""
➡️ But : Centraliser tous les paramètres configurables (nom d'app, secret JWT, durées, etc.)

Utilise pydantic-settings pour charger automatiquement les variables d'environnement (.env, variables système…).

Fournit une fonction get_settings() mise en cache, que tu importes ailleurs :

from app.core.config import get_settings
print(get_settings().APP_NAME)


🔹 Avantages :

Plus propre que des constantes éparpillées dans le code.

Facilite le passage entre environnements (dev / prod / test).

Le secret JWT est obligatoire : sans lui, le démarrage échoue (pas d'erreur au runtime).
"""

from datetime import timedelta
from functools import lru_cache

from jose.constants import ALGORITHMS
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from app.security.tokens import JWTSettings


class Settings(BaseSettings):
    # -----------------------------
    # App
    # -----------------------------
    APP_NAME: str = "Todo-Back"
    ENV: str = "dev"  # dev | prod | test
    LOG_LEVEL: str = "INFO"

    # -----------------------------
    # JWT / Auth
    # -----------------------------
    JWT_SECRET_KEY: str = Field(min_length=1)   # pas de valeur par défaut : requis
    JWT_ISSUER: str = "todo-api"
    JWT_ALGORITHM: str = "HS256"
    TOKEN_TTL_HOURS: int = Field(default=24, ge=1)

    # -----------------------------
    # Mots de passe
    # -----------------------------
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "ignore",
    }

    @field_validator("JWT_SECRET_KEY")
    @classmethod
    def _secret_not_blank(cls, value: str) -> str:
        # Un secret composé uniquement d'espaces ne vaut pas mieux qu'un secret absent
        if not value.strip():
            raise ValueError("JWT_SECRET_KEY must not be blank")
        return value

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def _algorithm_is_hmac(cls, value: str) -> str:
        # Le secret est une clé symétrique : seuls les algos HMAC (HS256/384/512) conviennent
        if value not in ALGORITHMS.HMAC:
            raise ValueError(f"JWT_ALGORITHM must be one of {sorted(ALGORITHMS.HMAC)}")
        return value


@lru_cache
def get_settings() -> Settings:
    """Instance unique, construite au premier appel (au démarrage de l'app)."""
    return Settings()


def build_jwt_settings(settings: Settings) -> JWTSettings:
    """Objet JWT prêt à l'emploi pour le TokenService."""
    return JWTSettings(
        secret=settings.JWT_SECRET_KEY,
        issuer=settings.JWT_ISSUER,
        algorithm=settings.JWT_ALGORITHM,
        access_ttl=timedelta(hours=settings.TOKEN_TTL_HOURS),
    )
