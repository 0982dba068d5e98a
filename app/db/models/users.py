"""
➡️ But : Définir la structure des enregistrements en mémoire.

Ici : l'utilisateur tel que le vault le stocke.

🔹 Avantages :

Objet figé : un utilisateur n'est jamais modifié après son inscription.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class User:
    username: str
    hashed_password: str = field(repr=False)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
