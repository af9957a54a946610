# auth_service/core/security.py
from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool

# bcrypt con costo fijo 10 (mismo formato $2b$ que los hashes ya guardados)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    default="bcrypt",
    deprecated="auto",
    bcrypt__rounds=10,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str | None) -> bool:
    # hash vacío o corrupto = no coincide, nunca excepción
    if not password or not hashed:
        return False
    try:
        return pwd_context.verify(password, hashed)
    except (ValueError, TypeError):
        return False


async def hash_password_async(password: str) -> str:
    """bcrypt es CPU puro: lo mandamos al threadpool para no bloquear el loop."""
    return await run_in_threadpool(hash_password, password)


async def verify_password_async(password: str, hashed: str | None) -> bool:
    return await run_in_threadpool(verify_password, password, hashed)
