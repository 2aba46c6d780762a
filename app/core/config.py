"""
Configuración de la app cargada desde variables de entorno (.env)

Todo lo que varía entre desarrollo/producción va aquí
"""

from functools import lru_cache
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db_name: str = "topseat"  # Nombre de la base de datos

    # App
    app_env: str = "development"  # o "production"
    debug: bool = False
    log_level: str = "INFO"

    # CORS - de dónde pueden venir los requests
    cors_origins: str = "http://localhost:3000"  # URLs separadas por coma

    # URL pública del sitio, se usa para armar los links de verificación
    base_url: str = "https://topseat.us"

    # ==================== Emails transaccionales (Brevo) ====================
    # Sin API key no se envían emails (el signup sigue funcionando igual)
    brevo_api_key: str | None = None
    email_sender_name: str = "Sky Fall"
    email_sender_address: str = "noreply@topseat.us"

    # Los links de verificación expiran a las 24 horas
    verification_token_ttl_hours: int = 24

    # ==================== Validación de emails ====================
    # API opcional para detectar emails desechables.
    # Si no está configurada se usa la lista local de dominios
    abstract_api_key: str | None = None

    # ==================== Rivalry ====================
    top_individuals_limit: int = 10

    class Config:
        env_file = ".env"  # Lee desde el archivo .env
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignora campos extras del .env que no estén en el modelo


@lru_cache()
def get_settings() -> Settings:
    """Retorna la instancia de configuración (cacheada para no releerla)"""
    return Settings()
