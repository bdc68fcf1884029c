"""
Capa API del suite: contexto del escenario, cliente HTTP, acciones y validaciones.
"""

from facturas_qa.api.context import RecordedResponse, ScenarioContext
from facturas_qa.api.client import InvoiceAPIClient
from facturas_qa.api.actions import ApiActions

__all__ = [
    "RecordedResponse",
    "ScenarioContext",
    "InvoiceAPIClient",
    "ApiActions",
]
