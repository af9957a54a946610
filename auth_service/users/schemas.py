# auth_service/users/schemas.py
from pydantic import BaseModel


# Campos opcionales: el status por campo faltante lo decide el servicio
# (401 en login, 404 en forgot, 400 en check-email) en vez de un 422 genérico.
class LoginIn(BaseModel):
    email: str | None = None
    password: str | None = None


class EmailIn(BaseModel):
    email: str | None = None


class SignupOut(BaseModel):
    message: str = "User created"
    userId: int


class LoginOut(BaseModel):
    message: str = "Login successful"
    userId: int


class MessageOut(BaseModel):
    message: str


class EmailExistsOut(BaseModel):
    exists: bool


class ErrorOut(BaseModel):
    error: str
