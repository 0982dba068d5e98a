from pydantic import BaseModel, Field

# ---------- Inputs ----------

class CredentialsIn(BaseModel):
    username: str = Field(min_length=1, examples=["alice"])
    password: str = Field(min_length=1, examples=["pw"])


# ---------- Outputs ----------

class MessageOut(BaseModel):
    message: str

class TokenOut(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int  # secondes
