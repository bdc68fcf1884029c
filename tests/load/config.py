# ==============================================================================
# Load Testing Configuration
# ==============================================================================
#
# Configuración centralizada de la prueba de carga del listado de facturas.
# Los valores se pueden sobreescribir con variables de entorno.
#
# ==============================================================================
"""
Configuración de Load Testing.

Define ritmo, duración, endpoint, credenciales y thresholds.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from config.settings import settings


# ==============================================================================
# TARGET
# ==============================================================================

HOST = os.getenv("LOAD_TEST_HOST", settings.API_BASE_URL)
ENDPOINT = os.getenv("LOAD_TEST_ENDPOINT", "/V1/invoices?page=1&invoice_number=FAC-7081986")
AUTH_TOKEN = os.getenv("LOAD_TEST_TOKEN", settings.AUTH_TOKEN)

# Texto que debe aparecer en el body de cada respuesta
BODY_MARKER = "invoice_number"


# ==============================================================================
# RITMO
# ==============================================================================

@dataclass
class LoadProfile:
    """Ritmo constante de requests durante una ventana fija."""
    rate: int               # Requests por segundo (todas las instancias)
    duration_seconds: int
    users: int              # Usuarios virtuales a lanzar

    @property
    def per_user_throughput(self) -> float:
        """Requests por segundo que debe hacer cada usuario."""
        return self.rate / self.users

    @property
    def expected_requests(self) -> int:
        return self.rate * self.duration_seconds

    def tick(self, run_time: float) -> Optional[Tuple[int, float]]:
        """
        Usuarios y spawn rate para el segundo `run_time` de la prueba.

        Todos los usuarios arrancan en el primer segundo y se mantienen
        hasta cumplir la duración; después devuelve None y Locust para.
        """
        if run_time >= self.duration_seconds:
            return None
        return self.users, float(self.users)


PROFILE = LoadProfile(
    rate=int(os.getenv("LOAD_TEST_RATE", "20")),
    duration_seconds=int(os.getenv("LOAD_TEST_DURATION", "30")),
    users=int(os.getenv("LOAD_TEST_USERS", "20")),
)


# ==============================================================================
# PERFORMANCE THRESHOLDS - Umbrales de rendimiento
# ==============================================================================

@dataclass
class PerformanceThreshold:
    """Umbrales que deciden el resultado de la prueba."""
    error_rate_pct: float = 5.0   # % máximo de requests fallidos (exclusivo)
    p95_ms: float = 800.0         # Percentil 95 máximo (exclusivo)
    check_latency_ms: float = 800.0


THRESHOLDS = PerformanceThreshold()


# ==============================================================================
# REPORTES
# ==============================================================================

REPORT_DIR = Path(os.getenv("LOAD_TEST_REPORT_DIR", "reports"))
REPORT_FILE = REPORT_DIR / "load_report.html"

# Timeout para requests
REQUEST_TIMEOUT = 30  # segundos
