"""
Page Object: pantalla de acceso

El login es un único input de código (#access-code) y un botón de
envío. Un acceso correcto hace que la app cargue `GET /V1/invoices`.
"""

import re

from playwright.sync_api import expect

from config.constants import (
    ACCESS_CHECK_TIMEOUT_MS,
    ELEMENT_TIMEOUT_MS,
    INVOICES_LIST_PATTERN,
    LOGIN_INPUT_TIMEOUT_MS,
    LoginSelectors,
)
from facturas_qa.pages.base import BasePage
from facturas_qa.utils.logger import get_logger

logger = get_logger(__name__)

LOGIN_URL = re.compile(r"login")


class LoginPage(BasePage):
    """Acciones y verificaciones de la pantalla de acceso."""

    def visit(self) -> None:
        logger.info("📄 Abriendo la pantalla de acceso…")
        self.goto(LoginSelectors.PATH)
        self.wait_visible(
            LoginSelectors.ACCESS_INPUT,
            timeout=LOGIN_INPUT_TIMEOUT_MS,
            description="El campo de código de acceso",
        )

    def fill_access_code(self, code: str) -> None:
        logger.info(f"✏️ Escribiendo el código de acceso: {code}")
        field = self.wait_visible(LoginSelectors.ACCESS_INPUT, description="El campo de código")
        field.scroll_into_view_if_needed()
        field.fill("")
        field.press_sequentially(code, delay=10)

    def submit(self) -> None:
        """Envía el formulario sin esperar el resultado."""
        logger.info("📨 Enviando el formulario de acceso (sin esperar dashboard)…")
        button = self.wait_visible(LoginSelectors.SUBMIT_BTN, description="El botón de enviar")
        self.check(
            lambda: expect(button).to_be_enabled(timeout=ELEMENT_TIMEOUT_MS),
            "El botón de enviar está deshabilitado",
            ELEMENT_TIMEOUT_MS,
        )
        button.click(force=True)

    def submit_expect_success(self) -> None:
        """
        Envía y espera que la app cargue las facturas.

        Raises:
            UITimeoutError: Si la llamada no llega en 20 s
            ExpectationError: Si la llamada no respondió 2xx
        """
        logger.info("✅ Enviando el formulario y esperando la carga del dashboard…")
        with self.expect_exchange("GET", INVOICES_LIST_PATTERN) as exchange:
            self.wait_visible(LoginSelectors.SUBMIT_BTN).click(force=True)
        exchange.require_success(
            f"La app intentó cargar las facturas pero respondió {exchange.status}"
        )
        logger.info("📦 La app cargó las facturas después de hacer login.")

    def enter_valid_code(self, code: str) -> None:
        """Escribe el código y pulsa el primer botón de envío disponible."""
        logger.info(f"🔐 Ingresando código de acceso: {code}")
        field = self.wait_visible(LoginSelectors.ACCESS_INPUT, description="El campo de código")
        field.fill("")
        field.press_sequentially(code)
        self.wait_visible(LoginSelectors.SUBMIT_ANY_BTN, description="El botón de enviar").click()

    def login_with(self, code: str) -> None:
        self.visit()
        self.fill_access_code(code)
        self.submit()

    def expect_logged_in(self) -> None:
        """Ya no está el input de acceso y la URL no es la de login."""
        self.wait_absent(
            LoginSelectors.ACCESS_INPUT,
            description="El campo de código de acceso",
        )
        self.check(
            lambda: expect(self.page).not_to_have_url(LOGIN_URL, timeout=ELEMENT_TIMEOUT_MS),
            "La URL sigue en la pantalla de login",
            ELEMENT_TIMEOUT_MS,
        )
        logger.info("🏠 Ya no estamos en la pantalla de acceso.")

    def expect_dashboard(self) -> None:
        """
        El acceso desapareció y hay contenido principal.

        Si existe el contenedor `data-testid="dashboard"` debe verse;
        si no, basta con alguna tabla o lista.
        """
        logger.info("🔎 Verificando que ya no estoy en la pantalla de acceso…")
        self.wait_absent(LoginSelectors.ACCESS_INPUT, description="El campo de código")
        if self.is_present(LoginSelectors.DASHBOARD):
            self.wait_visible(LoginSelectors.DASHBOARD, description="El contenedor del dashboard")
            return
        self.wait_attached(
            LoginSelectors.DASHBOARD_CONTENT,
            description="El contenido del dashboard (tabla/lista)",
        )

    def expect_access_error(self) -> None:
        """
        La app rechazó el código.

        Vale el mensaje dedicado o el input marcado como inválido
        (`ng-invalid` o `aria-invalid="true"`); se reintenta hasta
        ACCESS_CHECK_TIMEOUT_MS por si la validación es asíncrona.
        """
        logger.info("🚫 Validando que la app mostró un error de acceso…")
        rejected = self.page.locator(
            f"{LoginSelectors.ACCESS_ERROR}, {LoginSelectors.ACCESS_INVALID}"
        )
        self.check(
            lambda: expect(rejected.first).to_be_attached(timeout=ACCESS_CHECK_TIMEOUT_MS),
            "No se encontró mensaje de error ni se marcó el input como inválido",
            ACCESS_CHECK_TIMEOUT_MS,
        )
        if self.is_present(LoginSelectors.ACCESS_ERROR):
            self.wait_visible(LoginSelectors.ACCESS_ERROR, description="El mensaje de error de acceso")
            logger.info("✅ El mensaje de error de acceso está visible.")
        else:
            logger.info("✅ El input de acceso quedó marcado como inválido.")

    def expect_access_screen(self) -> None:
        logger.info("🟦 Confirmando que sigo en la pantalla de acceso…")
        self.wait_visible(
            LoginSelectors.ACCESS_INPUT,
            timeout=ACCESS_CHECK_TIMEOUT_MS,
            description="El campo de código de acceso",
        )
        dashboard = self.page.locator(LoginSelectors.DASHBOARD)
        self.check(
            lambda: expect(dashboard).to_have_count(0, timeout=ACCESS_CHECK_TIMEOUT_MS),
            "Se muestra el dashboard estando en la pantalla de acceso",
            ACCESS_CHECK_TIMEOUT_MS,
        )

    def logout(self) -> None:
        logger.info("🚪 Cerrando sesión (logout)…")
        self.wait_visible(LoginSelectors.LOGOUT_BTN, description="El botón de cerrar sesión").click(
            force=True
        )
        self.wait_visible(
            LoginSelectors.ACCESS_INPUT,
            timeout=ELEMENT_TIMEOUT_MS,
            description="El campo de código tras el logout",
        )
