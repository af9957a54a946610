# auth_service/users/service.py
from __future__ import annotations

import logging

from fastapi import UploadFile
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from auth_service.core.errors import (
    STORE_ERRORS,
    Conflict,
    InfrastructureError,
    InvalidInput,
    NotFound,
    Unauthorized,
)
from auth_service.core.security import hash_password_async, verify_password_async
from auth_service.media.storage import delete_upload, save_upload
from auth_service.users import repository

log = logging.getLogger("uvicorn")

INVALID_CREDENTIALS = "Invalid credentials"


async def register_user(
    db: AsyncSession,
    username: str | None,
    email: str | None,
    password: str | None,
    profile_image: UploadFile | None,
    uploads_dir: str,
) -> int:
    if not username or not email or not password:
        raise InvalidInput("Username, email and password are required")

    hashed = await hash_password_async(password)
    image_ref = None
    try:
        image_ref = await save_upload(profile_image, uploads_dir)
        user = await repository.create_user(db, username, email, hashed, image_ref)
        await db.commit()
    except IntegrityError as e:
        # username/email únicos: la DB es la que decide quién gana
        await db.rollback()
        delete_upload(image_ref, uploads_dir)
        log.warning(f"⚠️ Signup conflict: {e.orig!r}")
        raise Conflict("User already exists") from e
    except STORE_ERRORS as e:
        await db.rollback()
        delete_upload(image_ref, uploads_dir)
        log.error(f"❌ Signup error: {e!r}")
        raise InfrastructureError("Failed to create user") from e
    return user.id


async def login_user(db: AsyncSession, email: str | None, password: str | None) -> int:
    if not email or not password:
        raise Unauthorized(INVALID_CREDENTIALS)
    try:
        user = await repository.get_by_email(db, email)
    except STORE_ERRORS as e:
        log.error(f"❌ Login error: {e!r}")
        raise InfrastructureError("Failed to login") from e

    # email desconocido y password incorrecto responden igual
    if user is None:
        raise Unauthorized(INVALID_CREDENTIALS)
    if not await verify_password_async(password, user.password):
        raise Unauthorized(INVALID_CREDENTIALS)
    return user.id


async def forgot_password(db: AsyncSession, email: str | None) -> str:
    try:
        user = await repository.get_by_email(db, email) if email else None
    except STORE_ERRORS as e:
        log.error(f"❌ Forgot password error: {e!r}")
        raise InfrastructureError("Failed to process request") from e
    if user is None:
        raise NotFound("User not found")
    # TODO: generar token de reset y mandar el mail; por ahora solo confirma
    return "Password reset link sent"


async def check_email(db: AsyncSession, email: str | None) -> bool:
    if not email:
        raise InvalidInput("Email is required")
    try:
        return await repository.email_exists(db, email)
    except STORE_ERRORS as e:
        log.error(f"❌ Email check error: {e!r}")
        raise InfrastructureError("Internal server error") from e
