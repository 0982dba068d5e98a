"""
➡️ But : Définir les endpoints de l'API.

C'est la couche la plus proche du web :

Réceptionne les requêtes HTTP (GET, POST, PUT/PATCH, DELETE…)

Appelle le service correspondant (déjà lié à l'utilisateur du token)

Retourne les schémas de sortie (response_model)

Chaque fonction représente une route.

🔹 Avantages :

Automatiquement documentée dans Swagger :

summary, description, response_model, examples

Isolation totale du reste du code : les routes ne contiennent ni verrou ni logique métier.
"""

from fastapi import APIRouter, Depends, status
from app.api.v1.dependencies import get_todo_service
from app.features.authentication.schemas import MessageOut
from app.features.todos.schemas import TodoCreate, TodoUpdate, TodoOut
from app.features.todos.services import TodoService

router = APIRouter(
    prefix="/todos",
    tags=["todos"],
    responses={
        401: {"description": "Token absent, invalide ou expiré"},
        404: {"description": "Not Found"},
    },
)

@router.get(
    "",
    summary="Lister les todos",
    description="Retourne toutes les tâches de l'utilisateur courant, dans l'ordre de création.",
    response_model=list[TodoOut],
    responses={
        200: {
            "description": "Liste des tâches",
            "content": {
                "application/json": {
                    "example": [{"id": "9f1c2e4b7a0d4c1e8b3f5a6d7e8f9012", "title": "Acheter du lait",
                                 "completed": False, "created_at": "2025-01-01T10:00:00Z"}]
                }
            },
        }
    },
)
def list_todos(svc: TodoService = Depends(get_todo_service)):
    return svc.list()

@router.post(
    "",
    summary="Créer un todo",
    status_code=status.HTTP_201_CREATED,
    response_model=TodoOut,
)
def create_todo(payload: TodoCreate, svc: TodoService = Depends(get_todo_service)):
    return svc.create(title=payload.title)

@router.get(
    "/{todo_id}",
    summary="Récupérer un todo",
    response_model=TodoOut,
)
def get_todo(todo_id: str, svc: TodoService = Depends(get_todo_service)):
    return svc.get(todo_id)

@router.api_route(
    "/{todo_id}",
    methods=["PUT", "PATCH"],
    summary="Mettre à jour un todo",
    description="Mise à jour partielle : seuls les champs fournis sont modifiés.",
    response_model=TodoOut,
)
def update_todo(todo_id: str, payload: TodoUpdate, svc: TodoService = Depends(get_todo_service)):
    return svc.update(todo_id, title=payload.title, completed=payload.completed)

@router.delete(
    "/{todo_id}",
    summary="Supprimer un todo",
    response_model=MessageOut,
)
def delete_todo(todo_id: str, svc: TodoService = Depends(get_todo_service)):
    svc.delete(todo_id)
    return MessageOut(message="Todo deleted")
