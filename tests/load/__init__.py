# ==============================================================================
# Load Testing Module - Facturas E2E
# ==============================================================================
#
# Prueba de carga con Locust sobre el listado de facturas.
#
# Estructura:
#   - locustfile.py     : Entry point principal
#   - config.py         : Ritmo, endpoint y thresholds
#   - metrics.py        : Checks y tendencia de tiempos compartidos
#   - summary.py        : Resumen en consola, GitHub Actions y HTML
#   - users/            : Usuarios virtuales
#
# Uso:
#   locust -f tests/load/locustfile.py --headless -u 20 -r 20 -t 30s
#
# ==============================================================================
"""
Load Testing del API de facturas.

Mide estabilidad (tasa de errores) y velocidad (p95) del listado
de facturas bajo un ritmo constante de requests.
"""

__version__ = "1.0.0"
