"""
Errores del suite E2E

Taxonomía de fallos de un escenario:
- SETUP: payload literal mal formado en el feature
- NETWORK: status 4xx/5xx no tolerado por el step
- ASSERTION: expectativa que no se cumple
- UI_TIMEOUT: elemento o condición que no aparece a tiempo

Todos son fatales para el escenario; ningún step reintenta.
"""

from enum import Enum
from typing import Any, Dict, Optional

from facturas_qa.utils.logger import get_correlation_id


class ErrorCategory(str, Enum):
    """Categorías de error para clasificación."""
    SETUP = "SETUP"
    NETWORK = "NETWORK"
    ASSERTION = "ASSERTION"
    UI_TIMEOUT = "UI_TIMEOUT"


class E2EError(Exception):
    """
    Excepción base del suite.

    Incluye categoría y el correlation ID del escenario para poder
    ubicar el fallo en el log.
    """

    category: ErrorCategory = ErrorCategory.ASSERTION

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error
        self.correlation_id = get_correlation_id()

    def to_dict(self) -> Dict[str, Any]:
        """Convierte el error a diccionario para logging."""
        return {
            "message": self.message,
            "category": self.category.value,
            "correlation_id": self.correlation_id,
            "details": self.details,
            "original_error": str(self.original_error) if self.original_error else None,
        }


class PayloadError(E2EError):
    """El bloque JSON del feature no se pudo parsear."""

    category = ErrorCategory.SETUP


class UnexpectedStatusError(E2EError):
    """El API respondió 4xx/5xx y el step no lo permitía."""

    category = ErrorCategory.NETWORK

    def __init__(self, message: str, status_code: int, body: Any = None, **kwargs):
        self.status_code = status_code
        self.body = body
        details = kwargs.pop("details", None) or {}
        details.update({"status_code": status_code, "body": body})
        super().__init__(message, details=details, **kwargs)


class ExpectationError(E2EError, AssertionError):
    """
    Expectativa no cumplida.

    Hereda de AssertionError para que pytest la reporte como fallo
    del escenario y no como error de infraestructura.
    """

    category = ErrorCategory.ASSERTION

    def __init__(self, message: str, expected: Any = None, actual: Any = None, **kwargs):
        self.expected = expected
        self.actual = actual
        details = kwargs.pop("details", None) or {}
        details.update({"expected": expected, "actual": actual})
        super().__init__(message, details=details, **kwargs)

    def __str__(self) -> str:
        return f"{self.message} (esperado: {self.expected!r}, actual: {self.actual!r})"


class UITimeoutError(E2EError, AssertionError):
    """Un elemento o llamada de red no apareció dentro del timeout."""

    category = ErrorCategory.UI_TIMEOUT

    def __init__(self, message: str, timeout_ms: Optional[int] = None, **kwargs):
        self.timeout_ms = timeout_ms
        details = kwargs.pop("details", None) or {}
        details["timeout_ms"] = timeout_ms
        super().__init__(message, details=details, **kwargs)
