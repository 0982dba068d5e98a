import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, TypedDict

from jose import jwt, JWTError, ExpiredSignatureError
from jose.exceptions import JOSEError, JWTClaimsError

from app.core.errors import (
    InternalError,
    TokenExpired,
    TokenMalformed,
    TokenSignatureInvalid,
)

logger = logging.getLogger(__name__)

# ==========================================================
# 🔧 Configuration : paramètres de génération/validation JWT
# ==========================================================

@dataclass(frozen=True)
class JWTSettings:
    """
    Configuration des tokens JWT.

    - `secret` : clé secrète pour signer/valider les tokens
    - `issuer` : émetteur (utilisé dans le payload)
    - `algorithm` : algo de signature (HS256 recommandé)
    - `access_ttl` : durée de vie d'un token de session
    """
    secret: str
    issuer: str = "todo-api"
    algorithm: str = "HS256"
    access_ttl: timedelta = timedelta(hours=24)


# ==========================================================
# 🧱 Types
# ==========================================================

class DecodedToken(TypedDict, total=False):
    iss: str
    sub: str            # nom d'utilisateur
    iat: int
    exp: int


# ==========================================================
# 🧩 Fonctions utilitaires
# ==========================================================

def _now() -> datetime:
    """Renvoie l'heure UTC actuelle."""
    return datetime.now(timezone.utc)


def _check_structure(token: str) -> DecodedToken:
    """
    Vérifie la forme du token (3 segments, header et claims lisibles, sub/exp présents)
    sans vérifier la signature.
    """
    if not token or token.count(".") != 2 or not all(token.split(".")):
        raise TokenMalformed("token must have three non-empty segments")
    try:
        jwt.get_unverified_header(token)
        claims = jwt.get_unverified_claims(token)
    except JWTError as e:
        raise TokenMalformed(str(e)) from e

    sub = claims.get("sub")
    if not isinstance(sub, str) or not sub:
        raise TokenMalformed("missing subject")
    if not isinstance(claims.get("exp"), int):
        raise TokenMalformed("missing expiry")
    return claims  # type: ignore[return-value]


# ==========================================================
# 🎟️ Service de tokens
# ==========================================================

class TokenService:
    """
    Émet et valide les tokens de session (JWT signés, sans état côté serveur).

    Le secret est fixé une fois pour toutes à la construction, avant que le
    serveur n'accepte la moindre requête ; l'objet n'est plus modifié ensuite.
    """

    def __init__(self, settings: JWTSettings, now_fn: Callable[[], datetime] = _now):
        if not settings.secret:
            raise ValueError("a signing secret is required")
        self._settings = settings
        self._now = now_fn

    @property
    def ttl(self) -> timedelta:
        return self._settings.access_ttl

    def issue(self, username: str) -> str:
        """Crée un token signé pour `username`, valable `access_ttl`."""
        now = self._now()
        payload: DecodedToken = {
            "iss": self._settings.issuer,
            "sub": username,
            "iat": int(now.timestamp()),
            "exp": int((now + self._settings.access_ttl).timestamp()),
        }
        try:
            return jwt.encode(payload, self._settings.secret, algorithm=self._settings.algorithm)
        except JOSEError as e:
            logger.exception("Token signing failed")
            raise InternalError("token signing failed") from e

    def validate(self, token: str) -> str:
        """
        Renvoie le nom d'utilisateur porté par le token.

        Ordre des vérifications : structure, signature, expiration.
        Lève TokenMalformed, TokenSignatureInvalid ou TokenExpired.
        """
        _check_structure(token)
        try:
            decoded = jwt.decode(
                token,
                self._settings.secret,
                algorithms=[self._settings.algorithm],
                issuer=self._settings.issuer,
                options={"verify_aud": False},
            )
        except ExpiredSignatureError as e:
            raise TokenExpired(str(e)) from e
        except JWTClaimsError as e:
            raise TokenMalformed(str(e)) from e
        except JWTError as e:
            raise TokenSignatureInvalid(str(e)) from e
        return decoded["sub"]
