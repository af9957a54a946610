# auth_service/users/router.py
from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from auth_service.db.session import get_session
from auth_service.users import service as svc
from auth_service.users.schemas import (
    EmailExistsOut,
    EmailIn,
    ErrorOut,
    LoginIn,
    LoginOut,
    MessageOut,
    SignupOut,
)

router = APIRouter(tags=["users"])


@router.post(
    "/api/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=SignupOut,
    responses={400: {"model": ErrorOut}, 409: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def signup(
    request: Request,
    username: str | None = Form(None),
    email: str | None = Form(None),
    password: str | None = Form(None),
    profileImage: UploadFile | None = File(None),
    db: AsyncSession = Depends(get_session),
):
    """
    multipart/form-data con:
    - username, email, password
    - profileImage (opcional)
    """
    user_id = await svc.register_user(
        db,
        username,
        email,
        password,
        profileImage,
        uploads_dir=request.app.state.settings.UPLOADS_DIR,
    )
    return SignupOut(userId=user_id)


@router.post(
    "/api/login",
    response_model=LoginOut,
    responses={401: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def login(payload: LoginIn, db: AsyncSession = Depends(get_session)):
    user_id = await svc.login_user(db, payload.email, payload.password)
    return LoginOut(userId=user_id)


@router.post(
    "/api/forgot",
    response_model=MessageOut,
    responses={404: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def forgot(payload: EmailIn, db: AsyncSession = Depends(get_session)):
    message = await svc.forgot_password(db, payload.email)
    return MessageOut(message=message)


@router.post(
    "/check-email-data",
    response_model=EmailExistsOut,
    responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}},
)
async def check_email_data(payload: EmailIn, db: AsyncSession = Depends(get_session)):
    exists = await svc.check_email(db, payload.email)
    return EmailExistsOut(exists=exists)
