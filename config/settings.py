"""
Configuración centralizada del suite E2E

Carga variables de entorno (o archivo .env) y proporciona acceso a
configuración en steps, page objects y pruebas de carga.

Uso:
    from config.settings import settings

    url = settings.API_BASE_URL + "/V1/invoices"
    token = settings.AUTH_TOKEN
"""

from typing import Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

from config.environments import Environment, get_config


DEFAULT_ACCESS_CODE = "UXTY789@!!1"


class Settings(BaseSettings):
    """
    Configuración del suite con soporte multi-entorno.

    Todas las configuraciones se cargan desde variables de entorno
    o archivo .env, con valores por defecto que apuntan al ambiente QA.
    """

    # =========================================================================
    # ENTORNO
    # =========================================================================
    ENVIRONMENT: Environment = Environment.LOCAL

    # =========================================================================
    # APLICACIÓN BAJO PRUEBA
    # =========================================================================
    BASE_URL: str = "https://candidates-qa.contalink.com"
    API_BASE_URL: str = "https://candidates-api.contalink.com"
    BASE_PATH: str = "/V1"

    # =========================================================================
    # CREDENCIALES
    # =========================================================================
    # AUTH_TOKEN cae a ACCESS_CODE cuando no viene definido
    AUTH_TOKEN: Optional[str] = None
    ACCESS_CODE: str = DEFAULT_ACCESS_CODE

    # =========================================================================
    # DATOS DE PRUEBA (factura)
    # =========================================================================
    INVOICE_NUMBER: str = "FACTURA-CRIS"
    INVOICE_TOTAL: float = 100
    INVOICE_STATUS: str = "Vigente"

    # =========================================================================
    # HTTP
    # =========================================================================
    HTTP_TIMEOUT_SECONDS: float = 20.0

    # False: los escenarios del API corren contra el API falso en memoria
    E2E_LIVE: bool = False

    # =========================================================================
    # NAVEGADOR
    # =========================================================================
    HEADLESS: Optional[bool] = None
    VIEWPORT_WIDTH: int = 1366
    VIEWPORT_HEIGHT: int = 768
    # Pausa entre acciones de Playwright; sin valor se toma del perfil
    SLOW_MO_MS: Optional[int] = None

    # Reintentos de un escenario fallido; sin valor se toma del perfil
    RERUNS: Optional[int] = None

    # =========================================================================
    # LOGGING
    # =========================================================================
    LOG_LEVEL: Optional[str] = None
    LOG_FORMAT: str = "console"  # json o console
    LOG_DIR: str = "logs"
    LOG_MAX_SIZE_MB: int = 10
    LOG_BACKUP_COUNT: int = 5

    @field_validator("BASE_URL", "API_BASE_URL")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Las rutas de los steps ya empiezan con '/'"""
        return v.rstrip("/")

    @field_validator("BASE_PATH")
    @classmethod
    def validate_base_path(cls, v: str) -> str:
        """El prefijo del API debe empezar con '/'"""
        if not v.startswith("/"):
            raise ValueError("BASE_PATH debe empezar con '/'")
        return v

    @model_validator(mode="after")
    def apply_fallbacks(self) -> "Settings":
        """Aplica los valores de respaldo del token y del perfil de entorno."""
        if not self.AUTH_TOKEN:
            self.AUTH_TOKEN = self.ACCESS_CODE or DEFAULT_ACCESS_CODE

        env_config = get_config(self.ENVIRONMENT)
        if self.HEADLESS is None:
            self.HEADLESS = env_config.HEADLESS
        if self.LOG_LEVEL is None:
            self.LOG_LEVEL = env_config.LOG_LEVEL
        if self.SLOW_MO_MS is None:
            self.SLOW_MO_MS = env_config.SLOW_MO_MS
        if self.RERUNS is None:
            self.RERUNS = env_config.RERUNS
        return self

    def api_url(self, path: str) -> str:
        """Concatena la URL base del API con la ruta literal del step."""
        return f"{self.API_BASE_URL}{path}"

    def ui_url(self, path: str = "/") -> str:
        """Concatena la URL base de la aplicación con una ruta."""
        return f"{self.BASE_URL}{path}"

    def is_ci(self) -> bool:
        """Verifica si corre en CI."""
        return self.ENVIRONMENT == Environment.CI

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


# Instancia única de configuración
settings = Settings()
