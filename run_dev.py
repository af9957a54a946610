# run_dev.py
import os
import socket

from auth_service.core.config import settings

APP_FACTORY = "auth_service.main:create_app"


def _lan_ip() -> str:
    """Obtiene IP LAN real sin depender de hostname/DNS."""
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        s.connect(("8.8.8.8", 80))
        ip = s.getsockname()[0]
        s.close()
        return ip
    except OSError:
        return "127.0.0.1"


def _reload_flag() -> bool:
    reload_env = os.getenv("RELOAD")
    if reload_env is None:
        return False
    return reload_env.strip() in ("1", "true", "True", "yes", "on")


def main():
    import uvicorn

    host = settings.HOST
    port = settings.PORT
    reload_flag = _reload_flag()

    print(f"🔗 API local: http://127.0.0.1:{port}")
    print(f"📱 API LAN:   http://{_lan_ip()}:{port}")
    print(f"🌀 reload={'ON' if reload_flag else 'OFF'}")

    # lifespan="on": si la DB no conecta tras los reintentos, uvicorn sale con código != 0
    uvicorn.run(
        APP_FACTORY,
        factory=True,
        host=host,
        port=port,
        reload=reload_flag,
        reload_dirs=["auth_service"],
        reload_excludes=[".venv", ".git", "__pycache__", "Uploads"],
        timeout_keep_alive=30,
        timeout_graceful_shutdown=15,
        log_level=os.getenv("LOG_LEVEL", "info"),
        lifespan="on",
    )


if __name__ == "__main__":
    main()
