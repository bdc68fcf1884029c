"""Dobles de prueba del suite."""

from tests.fakes.invoice_api import FakeInvoiceAPI

__all__ = ["FakeInvoiceAPI"]
