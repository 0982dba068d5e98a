import bcrypt

# Limite de bcrypt : au-delà de 72 octets, le mot de passe serait tronqué
MAX_PASSWORD_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")


def hash_password(password: str, rounds: int = 12) -> str:
    """
    Hache un mot de passe avec bcrypt (sel aléatoire inclus dans le hash).
    Lève ValueError si le mot de passe dépasse 72 octets, au lieu de le tronquer.
    """
    raw = _encode(password)
    if len(raw) > MAX_PASSWORD_BYTES:
        raise ValueError("password longer than 72 bytes")
    return bcrypt.hashpw(raw, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    """Compare un mot de passe en clair au hash stocké."""
    raw = _encode(password)
    if len(raw) > MAX_PASSWORD_BYTES:
        # Jamais accepté à l'inscription : ne peut correspondre à aucun hash
        return False
    return bcrypt.checkpw(raw, hashed_password.encode("utf-8"))
