"""Configuración central de la aplicación (Pydantic Settings).

- Carga variables desde .env en la raíz del proyecto.
- Agrupa ajustes por área: App, CORS, Mongo, Auth/JWT, Password hashing, Logging.
"""
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resuelve el .env ubicado en la raíz del proyecto (independiente del CWD)
ENV_FILE = Path(__file__).resolve().parents[2] / ".env"


class ConfigurationError(RuntimeError):
    """Falta configuración obligatoria; el arranque no debe continuar."""


class Settings(BaseSettings):
    """Conjunto de variables de configuración con valores por defecto razonables.

    Nota: `mongo_uri` y `jwt_secret` no tienen default; sin ellos la app no arranca
    (ver `require()`).
    """
    # App
    app_name: str = "Notes API"
    api_prefix: str = "/api"
    port: int = 5000
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]
    cors_allow_any: bool = True  # clientes web en cualquier origen

    # Mongo
    mongo_uri: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("DATABASE_URL", "MONGO_URI"),
    )
    mongo_db: str = "notes_db"
    mongo_tls: bool = False
    # TLS relax options (dev only)
    mongo_tls_insecure: bool = False
    mongo_tls_allow_invalid_hostnames: bool = False
    mongo_server_selection_timeout_ms: int = 15000

    # Auth / JWT
    jwt_secret: Optional[str] = Field(
        None,
        validation_alias=AliasChoices("JWT_SECRET", "SECRET_KEY"),
    )
    jwt_algorithm: str = "HS256"
    # None = tokens sin expiración
    access_token_expire_minutes: Optional[int] = None

    # Password hashing (argon2id); costos ajustables
    password_time_cost: int = 2
    password_memory_cost: int = 51200
    password_parallelism: int = 2

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # no fallar si hay variables no usadas
        populate_by_name=True,
    )

    # --- Utilidades derivadas / helpers ---
    @property
    def api_prefix_normalized(self) -> str:
        """Devuelve `api_prefix` con formato consistente.

        - Siempre inicia con '/'
        - Sin '/' final (excepto cuando es solo '/')
        - Si está vacío, devuelve ""
        """
        pref = (self.api_prefix or "").strip()
        if not pref:
            return ""
        if not pref.startswith('/'):
            pref = '/' + pref
        if len(pref) > 1 and pref.endswith('/'):
            pref = pref[:-1]
        return pref

    def require(self) -> None:
        """Valida que existan los valores obligatorios para arrancar."""
        missing = []
        if not self.mongo_uri:
            missing.append("DATABASE_URL")
        if not self.jwt_secret:
            missing.append("JWT_SECRET")
        if missing:
            raise ConfigurationError(f"Faltan variables de entorno requeridas: {', '.join(missing)}")


settings = Settings()
