import os
import shutil
import time

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

# prefijo público bajo el que se montan los uploads (ver main.py)
UPLOADS_URL_PREFIX = "/uploads"


def _new_name(ext: str) -> str:
    return f"{time.time_ns()}{ext}"


def _write_exclusive(file: UploadFile, uploads_dir: str, ext: str) -> str:
    """
    Vuelca el UploadFile a <uploads_dir>/<timestamp><ext>.
    Abre con 'xb': si el nombre ya existe se pide otro timestamp, nunca se pisa.
    """
    os.makedirs(uploads_dir, exist_ok=True)
    while True:
        name = _new_name(ext)
        try:
            with open(os.path.join(uploads_dir, name), "xb") as out:
                shutil.copyfileobj(file.file, out)
            return name
        except FileExistsError:
            continue


async def save_upload(file: UploadFile | None, uploads_dir: str) -> str | None:
    """
    Guarda la imagen de perfil subida en el signup.
    Sin archivo → None (no es error).
    Devuelve la referencia pública, p. ej. '/uploads/1718000000000000000.png'.
    """
    if file is None or not file.filename:
        return None
    ext = os.path.splitext(file.filename)[1]
    name = await run_in_threadpool(_write_exclusive, file, uploads_dir, ext)
    return f"{UPLOADS_URL_PREFIX}/{name}"


def delete_upload(ref: str | None, uploads_dir: str) -> None:
    """
    Elimina el archivo de una referencia '/uploads/<name>' (si existe).
    No lanza error si ya no está.
    """
    if not ref:
        return
    abs_path = os.path.join(uploads_dir, os.path.basename(ref))
    try:
        os.remove(abs_path)
    except FileNotFoundError:
        pass
