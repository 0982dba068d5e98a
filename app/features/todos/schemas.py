"""
➡️ But : Définir les formats d'entrée/sortie de l'API (couche validation).

Contient les modèles Pydantic utilisés par FastAPI :

TodoCreate → corps de requête POST

TodoUpdate → corps PUT/PATCH (champs optionnels : mise à jour partielle)

TodoOut → réponse de l'API

Sépare les modèles "de stockage" (Task) de ceux "de transfert" (I/O API).

🔹 Avantages :

Validation automatique.

Documente les champs dans Swagger (types, exemples...).

N'expose pas les détails internes du store (ex : compteur de version).
"""

from datetime import datetime
from pydantic import BaseModel, Field

class TodoCreate(BaseModel):
    title: str = Field(..., min_length=1, examples=["Acheter du lait"])

class TodoUpdate(BaseModel):
    title: str | None = Field(None, examples=["Aller courir"])
    completed: bool | None = Field(None, examples=[True])

class TodoOut(BaseModel):
    id: str
    title: str
    completed: bool
    created_at: datetime

    model_config = {"from_attributes": True}
