"""Environment-driven settings. A ``.env`` file in the working directory is
loaded first so local development does not need exported variables."""
import os

from dotenv import load_dotenv

load_dotenv()

DEFAULT_CORS_ORIGINS = (
    "http://localhost:4321,http://127.0.0.1:4321,"
    "http://localhost:5173,http://127.0.0.1:5173"
)


def _env(name: str, default: str) -> str:
    # "KEY=" in .env counts as unset
    value = os.environ.get(name, "").strip()
    return value or default


def _parse_list(raw: str) -> list[str]:
    return [part.strip() for part in raw.split(",") if part.strip()]


class KvSettings:
    def __init__(self) -> None:
        self.url = os.environ.get("KV_URL", "")
        self.token = os.environ.get("KV_TOKEN", "")
        self.socket_timeout = float(_env("KV_SOCKET_TIMEOUT", "5.0"))


class ServerSettings:
    def __init__(self) -> None:
        self.host = _env("HOST", "127.0.0.1")
        self.port = int(_env("PORT", "8000"))
        self.log_level = _env("LOG_LEVEL", "INFO").upper()
        self.cors_origins = _parse_list(_env("CORS_ORIGINS", DEFAULT_CORS_ORIGINS))


class Settings:
    def __init__(self) -> None:
        self.environment = _env("ENVIRONMENT", "dev")
        self.kv = KvSettings()
        self.server = ServerSettings()


se = Settings()
