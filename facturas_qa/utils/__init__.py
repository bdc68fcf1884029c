"""
Utilidades del Suite

Módulo que exporta:
- Logger: Logging con el contexto del escenario
- Errors: Taxonomía de fallos del escenario
"""

# Logger
from facturas_qa.utils.logger import (
    get_logger,
    setup_logging,
    get_correlation_id,
    ScenarioLogContext,
    log_title,
    log_json,
    log_exception,
    log_performance,
)

# Errors
from facturas_qa.utils.errors import (
    ErrorCategory,
    E2EError,
    PayloadError,
    UnexpectedStatusError,
    ExpectationError,
    UITimeoutError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "get_correlation_id",
    "ScenarioLogContext",
    "log_title",
    "log_json",
    "log_exception",
    "log_performance",
    "ErrorCategory",
    "E2EError",
    "PayloadError",
    "UnexpectedStatusError",
    "ExpectationError",
    "UITimeoutError",
]
