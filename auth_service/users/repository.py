# auth_service/users/repository.py
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from auth_service.users.models import User


async def get_by_email(db: AsyncSession, email: str) -> User | None:
    res = await db.execute(select(User).where(User.email == email))
    return res.scalar_one_or_none()


async def email_exists(db: AsyncSession, email: str) -> bool:
    res = await db.execute(select(User.id).where(User.email == email).limit(1))
    return res.scalar_one_or_none() is not None


async def create_user(
    db: AsyncSession,
    username: str,
    email: str,
    hashed_password: str,
    profile_image: str | None = None,
) -> User:
    user = User(
        username=username,
        email=email,
        password=hashed_password,
        profile_image=profile_image,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user
