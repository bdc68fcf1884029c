"""
Constantes del sistema

Define valores que no cambian durante la ejecución.
"""

import re
from enum import Enum


class InvoiceStatus(str, Enum):
    """Estados de factura tal como los muestra la aplicación"""
    VIGENTE = "Vigente"
    ELIMINADA = "Eliminada"


class HttpMethod(str, Enum):
    """Métodos HTTP usados por los steps del API"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


# Calificador opcional de los steps que toleran respuestas 4xx/5xx
ALLOW_ERROR_QUALIFIER = "(permitiendo 4xx)"

# Status esperado cuando el total de la factura es negativo
NEGATIVE_TOTAL_STATUS = 422

# Mensaje del API cuando la factura no existe
INVOICE_NOT_FOUND_MESSAGE = "Factura no encontrada"

# Campos de factura que se comparan entre payload y respuesta
INVOICE_REFLECTED_FIELDS = (
    "invoice_number",
    "invoice_date",
    "total",
    "status",
    "active",
)


# ============================================================================
# TIMEOUTS UI (milisegundos)
# ============================================================================

LOGIN_INPUT_TIMEOUT_MS = 15000
ELEMENT_TIMEOUT_MS = 10000
ACCESS_CHECK_TIMEOUT_MS = 8000
TABLE_ROWS_TIMEOUT_MS = 15000
NETWORK_WAIT_TIMEOUT_MS = 20000
CONFIRM_DIALOG_TIMEOUT_MS = 3000


# ============================================================================
# SELECTORES UI
# ============================================================================

class LoginSelectors:
    """Selectores de la pantalla de acceso"""
    PATH = "/"
    ACCESS_INPUT = "#access-code"
    SUBMIT_BTN = 'button[type="submit"]'
    SUBMIT_ANY_BTN = 'button[type="submit"], button#access-submit'
    DASHBOARD = '[data-testid="dashboard"]'
    ACCESS_ERROR = '[data-testid="access-error"]'
    # Angular marca ng-invalid; otros formularios usan aria-invalid
    ACCESS_INVALID = "#access-code.ng-invalid, #access-code[aria-invalid='true']"
    DASHBOARD_CONTENT = "table, [data-testid='invoices-list'], [role='table'], .grid, .list"
    LOGOUT_BTN = "xpath=/html/body/app-root/div/div/div/button"


class InvoiceSelectors:
    """Selectores de la pantalla de facturas"""
    MENU_ENTRY = 'a, button, [role="menuitem"]'
    NEW_BTN = "xpath=/html/body/app-root/div/div/app-invoices/div[1]/button"
    NUMBER_INPUT = "#invoiceNumber"
    TOTAL_INPUT = 'input[name="total"], #total, input[placeholder*="Total"], input[type="number"]'
    STATUS_SELECT = "#status"
    SUBMIT_BTN = "button, [type='submit']"
    SHOW_DELETED = "#showDeleted"
    SEARCH_INPUT = 'input[name="factura"], input[placeholder*="Factura"], input[type="text"]'
    SEARCH_BTN = (
        "xpath=/html/body/app-root/div/div/app-invoices/div[2]"
        "/app-filter-form/div/div[2]/button[1]"
    )
    TABLE_ROWS = (
        "body > app-root > div > div > app-invoices"
        " > div.overflow-x-auto.mt-4 > table > tbody tr"
    )
    ROW = "tr, .row, [role='row']"
    DELETE_BTN = 'button[title="Eliminar factura"], .btn.btn-sm.btn-error[title="Eliminar factura"]'
    CONFIRM_MODAL = "[role='dialog'], [role='alertdialog'], dialog, .modal, .swal2-popup"
    CONFIRM_BTN = "button, [role='button']"


# Llamadas de red que se esperan desde la UI (se buscan en la URL completa)
INVOICES_CREATE_PATTERN = re.compile(r"/V1/invoices$")
INVOICES_LIST_PATTERN = re.compile(r"/V1/invoices(\?.*)?$")
INVOICES_REFRESH_PATTERN = re.compile(r"/V1/invoices\?page=1(&.*)?$")
