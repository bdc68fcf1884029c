"""
Configuración Multi-Entorno

Define perfiles de ejecución para local, qa y ci.
"""

from enum import Enum
from typing import Dict, Type


class Environment(str, Enum):
    """Entornos disponibles"""
    LOCAL = "local"
    QA = "qa"
    CI = "ci"


class BaseConfig:
    """Configuración base compartida"""
    # Navegador
    HEADLESS: bool = True
    VIEWPORT_WIDTH: int = 1366
    VIEWPORT_HEIGHT: int = 768
    SLOW_MO_MS: int = 0

    # Reintentos de escenario completo (pytest-rerunfailures)
    RERUNS: int = 0

    LOG_LEVEL: str = "INFO"


class LocalConfig(BaseConfig):
    """Configuración para correr desde la máquina del desarrollador"""
    HEADLESS: bool = False
    SLOW_MO_MS: int = 50
    LOG_LEVEL: str = "DEBUG"


class QAConfig(BaseConfig):
    """Configuración contra el ambiente de QA"""
    LOG_LEVEL: str = "INFO"


class CIConfig(BaseConfig):
    """
    Configuración para CI.

    Siempre headless y con logs en JSON para que el runner
    los pueda procesar.
    """
    HEADLESS: bool = True
    RERUNS: int = 2
    LOG_LEVEL: str = "INFO"


def get_config(env: Environment) -> Type[BaseConfig]:
    """
    Obtiene la configuración según el entorno.

    Args:
        env: Entorno seleccionado

    Returns:
        Clase de configuración correspondiente
    """
    configs: Dict[Environment, Type[BaseConfig]] = {
        Environment.LOCAL: LocalConfig,
        Environment.QA: QAConfig,
        Environment.CI: CIConfig,
    }
    return configs.get(env, LocalConfig)
