"""
Configuracion de la aplicacion / Application configuration.
Utiliza pydantic-settings para cargar desde .env o variables de entorno.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Flota Admin"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # Database - SQLite por defecto para desarrollo
    # Database - SQLite by default for development
    DATABASE_URL: str = "sqlite+aiosqlite:///./flota_admin.db"

    # CORS - origenes autorizados / allowed origins
    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "60/minute"

    # Paginacion / Pagination
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
