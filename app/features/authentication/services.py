import logging

from fastapi import HTTPException, status

from app.core.errors import AlreadyExists, InternalError, InvalidCredentials, TokenError
from app.db.repositories.users import CredentialVault
from app.security.tokens import TokenService
from app.features.authentication.schemas import CredentialsIn, MessageOut, TokenOut

logger = logging.getLogger(__name__)

UNAUTHORIZED_HEADERS = {"WWW-Authenticate": "Bearer"}


class AuthService:
    """
    Service d'authentification : orchestre le vault + les tokens.
    Traduit les erreurs métier en HTTPException propres.
    """

    def __init__(self, *, vault: CredentialVault, tokens: TokenService):
        self.vault = vault
        self.tokens = tokens

    # ---------- Register ----------
    def register(self, payload: CredentialsIn) -> MessageOut:
        try:
            self.vault.register(payload.username, payload.password)
        except AlreadyExists:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="User already exists")
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Username and password required",
            )
        except InternalError:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Encryption error",
            )
        logger.info("User %r registered", payload.username)
        return MessageOut(message="User created")

    # ---------- Login ----------
    def login(self, payload: CredentialsIn) -> TokenOut:
        try:
            username = self.vault.verify(payload.username, payload.password)
        except InvalidCredentials:
            # Ne pas révéler si l'utilisateur existe
            logger.info("Failed login for %r", payload.username)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid credentials",
            )
        except InternalError:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Encryption error",
            )

        try:
            token = self.tokens.issue(username)
        except InternalError:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Token generation failed",
            )
        return TokenOut(token=token, expires_in=int(self.tokens.ttl.total_seconds()))

    # ---------- Identité depuis le token ----------
    def authenticate(self, token: str) -> str:
        try:
            return self.tokens.validate(token)
        except TokenError as e:
            # Le motif reste dans les logs ; le client ne voit qu'un 401 générique
            logger.info("Token rejected (%s)", e.reason)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Unauthorized",
                headers=UNAUTHORIZED_HEADERS,
            )
