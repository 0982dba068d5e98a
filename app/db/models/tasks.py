"""
➡️ But : Définir la structure des tâches conservées par le TodoStore.

Une Task appartient à un seul utilisateur, via la collection qui la contient.
Le store ne laisse jamais sortir l'objet stocké : il renvoie des copies (snapshot()).

🔹 Avantages :

Personne hors du store ne peut modifier une tâche sans passer par ses verrous.
"""

import secrets
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone


def new_task_id() -> str:
    """Identifiant aléatoire de 128 bits, en hexadécimal."""
    return secrets.token_hex(16)


@dataclass
class Task:
    title: str
    id: str = field(default_factory=new_task_id)
    completed: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    # Incrémenté à chaque mise à jour acceptée : reflète l'ordre de sérialisation
    version: int = 1

    def snapshot(self) -> "Task":
        return replace(self)
