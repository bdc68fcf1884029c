"""
Sistema de Logging del suite E2E

Configura el logging para steps, page objects y pruebas de carga con:
- Salida a consola (colores en local, JSON en CI)
- Archivo rotativo con todos los logs en JSON
- Contexto del escenario en ejecución (feature, escenario, correlation ID)
- Helpers para dejar legible el request/response de cada step
"""

import json
import logging
import sys
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Optional

# Context variables con el escenario actual
correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)
feature_var: ContextVar[Optional[str]] = ContextVar('feature', default=None)
scenario_var: ContextVar[Optional[str]] = ContextVar('scenario', default=None)


# ============================================================================
# FORMATTERS
# ============================================================================

class ColoredFormatter(logging.Formatter):
    """
    Formatter con colores para ejecución local.
    """

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        scenario = scenario_var.get()
        record.scenario = f"[{scenario}] " if scenario else ""

        # Copia para no contaminar el record de los demás handlers
        colored = logging.makeLogRecord(record.__dict__)
        color = self.COLORS.get(record.levelname, '')
        colored.levelname = f"{color}{record.levelname}{self.RESET}"

        return super().format(colored)


class JSONFormatter(logging.Formatter):
    """
    Formatter JSON para CI y archivo.

    Genera logs estructurados que se pueden adjuntar como artefacto
    del pipeline.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "line": record.lineno,
        }

        correlation_id = correlation_id_var.get()
        if correlation_id:
            log_data["correlation_id"] = correlation_id

        feature = feature_var.get()
        if feature:
            log_data["feature"] = feature

        scenario = scenario_var.get()
        if scenario:
            log_data["scenario"] = scenario

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
            }

        if hasattr(record, 'extra_data'):
            log_data["extra"] = record.extra_data

        return json.dumps(log_data, ensure_ascii=False, default=str)


# ============================================================================
# LOGGER CONFIGURATION
# ============================================================================

_configured = False


def setup_logging(
    log_format: str = "console",
    log_level: str = "INFO",
    log_dir: str = "logs",
    max_size_mb: int = 10,
    backup_count: int = 5,
) -> None:
    """
    Configura el sistema de logging.

    Args:
        log_format: "console" (con colores) o "json"
        log_level: Nivel de log para consola (DEBUG, INFO, WARNING, ERROR)
        log_dir: Directorio para el archivo de log
        max_size_mb: Tamaño máximo del archivo antes de rotar
        backup_count: Archivos rotados que se conservan
    """
    global _configured

    if _configured:
        return

    level = getattr(logging, log_level.upper(), logging.INFO)

    logs_path = Path(log_dir)
    logs_path.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger("facturas_qa")
    root_logger.setLevel(logging.DEBUG)
    root_logger.handlers = []
    # pytest captura la salida de los handlers del root
    root_logger.propagate = True

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    if log_format == "json":
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(ColoredFormatter(
            '%(asctime)s | %(levelname)-8s | %(scenario)s%(message)s',
            datefmt='%H:%M:%S'
        ))

    root_logger.addHandler(console_handler)

    file_handler = RotatingFileHandler(
        logs_path / "e2e.log",
        maxBytes=max_size_mb * 1024 * 1024,
        backupCount=backup_count,
        encoding='utf-8'
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(file_handler)

    _configured = True

    root_logger.debug(f"Logging configurado: format={log_format}, level={log_level}")


def get_logger(name: str) -> logging.Logger:
    """
    Obtiene un logger bajo la jerarquía "facturas_qa".

    Args:
        name: Nombre del módulo (típicamente __name__)

    Returns:
        Logger configurado
    """
    if not _configured:
        try:
            from config.settings import settings
            setup_logging(
                log_format="json" if settings.is_ci() else settings.LOG_FORMAT,
                log_level=settings.LOG_LEVEL or "INFO",
                log_dir=settings.LOG_DIR,
                max_size_mb=settings.LOG_MAX_SIZE_MB,
                backup_count=settings.LOG_BACKUP_COUNT,
            )
        except Exception:
            # Configuración por defecto si la de entorno es inválida
            setup_logging()

    if not name.startswith("facturas_qa"):
        name = f"facturas_qa.{name}"
    return logging.getLogger(name)


# ============================================================================
# CONTEXT MANAGEMENT
# ============================================================================

def get_correlation_id() -> Optional[str]:
    """Obtiene el correlation ID del escenario actual."""
    return correlation_id_var.get()


class ScenarioLogContext:
    """
    Context manager que marca los logs con el escenario en ejecución.

    Uso:
        with ScenarioLogContext(feature="Facturas API", scenario="Crear factura"):
            logger.info("Este log incluirá el escenario")
    """

    def __init__(self, feature: Optional[str] = None, scenario: Optional[str] = None):
        self.feature = feature
        self.scenario = scenario
        self._tokens = []

    def __enter__(self):
        self._tokens = [
            (correlation_id_var, correlation_id_var.set(str(uuid.uuid4()))),
            (feature_var, feature_var.set(self.feature)),
            (scenario_var, scenario_var.set(self.scenario)),
        ]
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        for var, token in reversed(self._tokens):
            var.reset(token)
        self._tokens = []
        return False


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def log_title(logger: logging.Logger, text: str) -> None:
    """Loggea un título enmarcado para separar los pasos en la salida."""
    line = "─" * max(30, len(text) + 4)
    logger.info(f"\n{line}\n🔎 {text}\n{line}")


def log_json(logger: logging.Logger, label: str, obj: Any) -> None:
    """Loggea un valor JSON con indentación (o el texto crudo si no es JSON)."""
    try:
        rendered = json.dumps(obj, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        rendered = str(obj)
    logger.info(f"{label}:\n{rendered}", extra={"extra_data": {"label": label}})


def log_exception(logger: logging.Logger, message: str, exc: Exception) -> None:
    """
    Loggea una excepción con contexto completo.

    Args:
        logger: Logger a usar
        message: Mensaje descriptivo
        exc: Excepción a loggear
    """
    logger.error(
        f"{message}: {type(exc).__name__}: {str(exc)}",
        exc_info=(type(exc), exc, exc.__traceback__),
        extra={
            "extra_data": {
                "exception_type": type(exc).__name__,
                "exception_message": str(exc),
            }
        }
    )


def log_performance(logger: logging.Logger, operation: str, duration_ms: float) -> None:
    """
    Loggea la duración de una operación.

    Args:
        logger: Logger a usar
        operation: Nombre de la operación
        duration_ms: Duración en milisegundos
    """
    logger.info(
        f"Performance: {operation} completed in {duration_ms:.2f}ms",
        extra={
            "extra_data": {
                "metric_type": "performance",
                "operation": operation,
                "duration_ms": duration_ms,
            }
        }
    )
