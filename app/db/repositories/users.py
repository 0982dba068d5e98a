"""
➡️ But : Conserver les comptes utilisateurs (le « vault »).

CredentialVault : nom d'utilisateur -> hash bcrypt.

register() fait le test d'existence et l'insertion sous le même verrou
(check-and-set) : deux inscriptions concurrentes du même nom ne peuvent
pas réussir toutes les deux.

🔹 Avantages :

Le hachage (lent) se fait hors verrou : le verrou n'est tenu que le temps d'un accès au dict.

Utilisateur inconnu et mauvais mot de passe donnent la même erreur.
"""

import logging
from typing import Optional

from app.core.errors import AlreadyExists, InternalError, InvalidCredentials
from app.db.models.users import User
from app.db.repositories.base import BaseRepository
from app.security.password import hash_password, verify_password

logger = logging.getLogger(__name__)


class CredentialVault(BaseRepository[str, User]):
    def __init__(self, bcrypt_rounds: int = 12) -> None:
        super().__init__()
        self._rounds = bcrypt_rounds
        # Hash factice : un utilisateur inconnu coûte autant qu'un mauvais mot de passe
        self._dummy_hash = hash_password("dummy-password", rounds=bcrypt_rounds)

    def _get(self, username: str) -> Optional[User]:
        with self._lock:
            return self._items.get(username)

    def exists(self, username: str) -> bool:
        return self._get(username) is not None

    def register(self, username: str, password: str) -> User:
        if not username or not password:
            raise ValueError("username and password are required")

        try:
            hashed = hash_password(password, rounds=self._rounds)
        except (ValueError, TypeError) as e:
            logger.exception("Password hashing failed for %r", username)
            raise InternalError("password hashing failed") from e

        user = User(username=username, hashed_password=hashed)
        with self._lock:
            if username in self._items:
                raise AlreadyExists(username)
            self._items[username] = user
        return user

    def verify(self, username: str, password: str) -> str:
        user = self._get(username)
        hashed = user.hashed_password if user else self._dummy_hash
        try:
            ok = verify_password(password, hashed)
        except (ValueError, TypeError) as e:
            logger.exception("Password check failed for %r", username)
            raise InternalError("password check failed") from e
        if user is None or not ok:
            raise InvalidCredentials()
        return user.username
