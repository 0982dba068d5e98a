"""
➡️ But : Conserver les tâches de chaque utilisateur, en mémoire, de façon sûre en concurrence.

TodoStore : CRUD (create, list, get, update, delete), toujours limité à l'identité appelante.

Chaque utilisateur a sa propre collection, protégée par son propre verrou :
- les opérations sur deux utilisateurs différents avancent en parallèle ;
- les opérations sur un même utilisateur sont totalement ordonnées ;
- un update est un read-modify-write complet fait sous le verrou.

Ce qui sort du store est toujours une copie : jamais l'objet stocké.

🔹 Avantages :

Aucune mise à jour acceptée par le store ne peut être perdue.

Une tâche d'un autre utilisateur est indiscernable d'une tâche inexistante (NotFound).
"""

import logging
import threading
from typing import List, Optional

from app.core.errors import NotFound
from app.db.models.tasks import Task
from app.db.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class _TaskCollection:
    """Tâches d'un utilisateur, dans l'ordre d'insertion."""

    __slots__ = ("lock", "tasks")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.tasks: List[Task] = []

    def index_of(self, task_id: str) -> int:
        # À appeler avec `lock` tenu
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                return i
        return -1


class TodoStore(BaseRepository[str, _TaskCollection]):
    """
    Le verrou de BaseRepository ne protège que le registre identité -> collection ;
    le contenu de chaque collection est protégé par le verrou de la collection.
    """

    def _collection(self, username: str, *, create: bool = False) -> Optional[_TaskCollection]:
        with self._lock:
            collection = self._items.get(username)
            if collection is None and create:
                collection = self._items[username] = _TaskCollection()
            return collection

    # ---------- CREATE ----------

    def create(self, username: str, title: str) -> Task:
        collection = self._collection(username, create=True)
        with collection.lock:
            # created_at est pris sous le verrou : l'ordre d'insertion suit l'ordre chronologique
            task = Task(title=title)
            collection.tasks.append(task)
            snapshot = task.snapshot()
        logger.debug("Task %s created for %s", task.id, username)
        return snapshot

    # ---------- READ ----------

    def list(self, username: str) -> List[Task]:
        collection = self._collection(username)
        if collection is None:
            return []
        with collection.lock:
            return [task.snapshot() for task in collection.tasks]

    def get(self, username: str, task_id: str) -> Task:
        collection = self._collection(username)
        if collection is None:
            raise NotFound(task_id)
        with collection.lock:
            i = collection.index_of(task_id)
            if i < 0:
                raise NotFound(task_id)
            return collection.tasks[i].snapshot()

    # ---------- UPDATE ----------

    def update(
        self,
        username: str,
        task_id: str,
        *,
        title: Optional[str] = None,
        completed: Optional[bool] = None,
    ) -> Task:
        """Mise à jour partielle : un champ à None garde sa valeur actuelle."""
        collection = self._collection(username)
        if collection is None:
            raise NotFound(task_id)
        with collection.lock:
            i = collection.index_of(task_id)
            if i < 0:
                raise NotFound(task_id)
            task = collection.tasks[i]
            if title is not None:
                task.title = title
            if completed is not None:
                task.completed = completed
            task.version += 1
            return task.snapshot()

    # ---------- DELETE ----------

    def delete(self, username: str, task_id: str) -> None:
        collection = self._collection(username)
        if collection is None:
            raise NotFound(task_id)
        with collection.lock:
            i = collection.index_of(task_id)
            if i < 0:
                raise NotFound(task_id)
            del collection.tasks[i]
        logger.debug("Task %s deleted for %s", task_id, username)
