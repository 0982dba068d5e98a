"""
➡️ But : Contenir la logique métier : appeler le store pour l'utilisateur courant, gérer les erreurs.

TodoService : lié à une identité (celle du token), il ne peut voir que les tâches de celle-ci.

Lève les exceptions HTTP (HTTPException) pour informer proprement le client.

🔹 Avantages :

Code métier découplé du web.

Test unitaire possible sans passer par FastAPI.
"""

from fastapi import HTTPException, status

from app.core.errors import NotFound
from app.db.models.tasks import Task
from app.db.repositories.todos import TodoStore


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")


class TodoService:
    def __init__(self, store: TodoStore, username: str):
        self.store = store
        self.username = username

    def list(self) -> list[Task]:
        return self.store.list(self.username)

    def get(self, todo_id: str) -> Task:
        try:
            return self.store.get(self.username, todo_id)
        except NotFound:
            raise _not_found()

    def create(self, title: str) -> Task:
        return self.store.create(self.username, title)

    def update(self, todo_id: str, *, title: str | None, completed: bool | None) -> Task:
        try:
            return self.store.update(self.username, todo_id, title=title, completed=completed)
        except NotFound:
            raise _not_found()

    def delete(self, todo_id: str) -> None:
        try:
            self.store.delete(self.username, todo_id)
        except NotFound:
            raise _not_found()
