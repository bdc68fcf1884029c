"""
Facturas E2E

Suite end-to-end de la aplicación de facturas: escenarios del API,
escenarios de UI con Page Objects y prueba de carga.
"""

__version__ = "1.0.0"
