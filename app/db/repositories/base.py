import threading
from typing import Dict, Generic, TypeVar

# Types génériques : clé du mapping, valeur stockée
KeyT = TypeVar("KeyT")
ValueT = TypeVar("ValueT")


class BaseRepository(Generic[KeyT, ValueT]):
    """
    Repository de base en mémoire, partagé par tout le processus.

    👉 Ne contient aucune logique métier.
    👉 Le mapping `_items` n'est lu ou modifié que sous `_lock`.
    👉 Les repositories concrets n'exposent jamais `_items` ni les objets qu'il contient.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: Dict[KeyT, ValueT] = {}

    def count(self) -> int:
        """Retourne le nombre d'entrées."""
        with self._lock:
            return len(self._items)

    def clear(self) -> None:
        """Vide le repository (utile pour les tests)."""
        with self._lock:
            self._items.clear()
