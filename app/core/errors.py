"""
➡️ But : Définir les erreurs métier du cœur (vault, tokens, store).

Le cœur ne connaît pas HTTP : il lève ces exceptions, et les services
(app/features/...) les traduisent en HTTPException avec le bon code.

🔹 Avantages :

Le store et le vault restent testables sans FastAPI.

Une seule table de correspondance erreur -> statut HTTP.
"""


class DomainError(Exception):
    """Base de toutes les erreurs métier."""


class AlreadyExists(DomainError):
    """Nom d'utilisateur déjà enregistré."""


class InvalidCredentials(DomainError):
    """Utilisateur inconnu ou mot de passe faux (volontairement indiscernables)."""


class NotFound(DomainError):
    """Tâche absente ou appartenant à un autre utilisateur."""


class InternalError(DomainError):
    """Échec du hachage ou de la signature."""


# -----------------------------
# Tokens
# -----------------------------
class TokenError(DomainError):
    """Token refusé. Le type exact sert au diagnostic, jamais au client."""

    reason = "invalid"


class TokenMalformed(TokenError):
    reason = "malformed"


class TokenSignatureInvalid(TokenError):
    reason = "signature"


class TokenExpired(TokenError):
    reason = "expired"
