# ==============================================================================
# Load Testing Users
# ==============================================================================
"""
Usuarios virtuales para pruebas de carga.

- BaseAPIUser: Usuario base con token, ritmo y registro de checks
- InvoicesUser: Consulta el listado de facturas
"""

from tests.load.users.base import BaseAPIUser
from tests.load.users.invoices import InvoicesUser

__all__ = ["BaseAPIUser", "InvoicesUser"]
