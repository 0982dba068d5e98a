"""
➡️ But : Construire l'état partagé du processus (vault + store) et le fournir aux routes.

init_storage() : crée le vault et le store (une seule fois, au démarrage).

get_storage() : dépendance FastAPI qui renvoie l'état posé sur app.state par le lifespan.

🔹 Avantages :

Un seul endroit pour l'état mutable partagé.

Réutilisable par injection (Depends(get_storage)).
"""

from dataclasses import dataclass

from fastapi import Request

from app.core.config import Settings
from app.db.repositories.todos import TodoStore
from app.db.repositories.users import CredentialVault


@dataclass(frozen=True)
class Storage:
    vault: CredentialVault
    store: TodoStore


def init_storage(settings: Settings) -> Storage:
    return Storage(
        vault=CredentialVault(bcrypt_rounds=settings.BCRYPT_ROUNDS),
        store=TodoStore(),
    )


def get_storage(request: Request) -> Storage:
    """
    Dépendance FastAPI : l'état construit au démarrage.
    Utilisation :
        def route(..., storage: Storage = Depends(get_storage)):
            ...
    """
    return request.app.state.storage
