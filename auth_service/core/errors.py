# auth_service/core/errors.py
"""
Errores de dominio de los servicios.

Cada servicio levanta un `ServiceError` con su `kind`; el handler registrado
en `main.py` traduce el kind a status HTTP y responde `{"error": message}`.
El mensaje siempre es seguro para el cliente: el error original se loguea,
nunca se devuelve.
"""
import asyncio
from enum import Enum

from fastapi import status
from sqlalchemy.exc import SQLAlchemyError


class ErrorKind(str, Enum):
    INVALID = "invalid"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    INFRASTRUCTURE = "infrastructure"


STATUS_BY_KIND = {
    ErrorKind.INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INFRASTRUCTURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Fallos del store: asyncpg deja pasar sin envolver los errores de conexión
# (OSError) y los timeouts de connect (asyncio.TimeoutError en 3.10).
STORE_ERRORS = (SQLAlchemyError, OSError, asyncio.TimeoutError)


class ServiceError(Exception):
    kind: ErrorKind = ErrorKind.INFRASTRUCTURE

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


class InvalidInput(ServiceError):
    kind = ErrorKind.INVALID


class Unauthorized(ServiceError):
    kind = ErrorKind.UNAUTHORIZED


class NotFound(ServiceError):
    kind = ErrorKind.NOT_FOUND


class Conflict(ServiceError):
    kind = ErrorKind.CONFLICT


class InfrastructureError(ServiceError):
    kind = ErrorKind.INFRASTRUCTURE
