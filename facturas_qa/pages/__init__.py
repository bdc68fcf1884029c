"""
Page Objects de la aplicación de facturas.
"""

from facturas_qa.pages.base import BasePage, NetworkExchange
from facturas_qa.pages.login_page import LoginPage
from facturas_qa.pages.invoices_page import InvoicesPage
from facturas_qa.pages.dashboard_page import DashboardPage

__all__ = [
    "BasePage",
    "NetworkExchange",
    "LoginPage",
    "InvoicesPage",
    "DashboardPage",
]
