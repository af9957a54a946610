# auth_service/__init__.py
"""
Servicio de credenciales: signup, login, chequeo de email y forgot (stub)
sobre una sola tabla `users`.

Arranque: `python run_dev.py` o `uvicorn auth_service.main:create_app --factory`.
"""
