"""
➡️ But : Personnaliser la documentation Swagger/OpenAPI.

custom_openapi(app) modifie le schéma généré par FastAPI pour :

ajouter une description détaillée (conventions, authentification),

centraliser la personnalisation du Swagger.
"""

from fastapi.openapi.utils import get_openapi

def custom_openapi(app):
    if app.openapi_schema:
        return app.openapi_schema
    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=(
            "API de gestion de tâches multi-utilisateurs (stockage en mémoire).\n\n"
            "### Conventions\n"
            "- Toutes les heures sont en UTC.\n"
            "- `/todos` exige un header `Authorization: Bearer <token>` obtenu via `/login`.\n"
            "- Une tâche d'un autre utilisateur répond 404, comme une tâche inexistante.\n"
        ),
        routes=app.routes,
    )
    app.openapi_schema = openapi_schema
    return app.openapi_schema
