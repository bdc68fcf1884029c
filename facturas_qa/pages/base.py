"""
Page Object base

Envuelve una `Page` de Playwright con:
- Navegación relativa a settings.BASE_URL
- Esperas con timeout fijo que fallan con UITimeoutError
- `check`: aserciones de Playwright (`expect`) que reintentan hasta su timeout
- `expect_exchange`: esperar una llamada de red concreta y recién
  después inspeccionar el DOM
"""

import re
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Locator, Page
from playwright.sync_api import Response
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from config.constants import ELEMENT_TIMEOUT_MS, NETWORK_WAIT_TIMEOUT_MS
from config.settings import settings
from facturas_qa.utils.errors import ExpectationError, UITimeoutError
from facturas_qa.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class NetworkExchange:
    """Llamada de red esperada por un page object."""

    method: str
    pattern: "re.Pattern[str]"
    status: Optional[int] = None
    url: Optional[str] = None
    body: Any = None

    def matches(self, response: Response) -> bool:
        return (
            response.request.method.upper() == self.method.upper()
            and self.pattern.search(response.url) is not None
        )

    def capture(self, response: Response) -> None:
        self.status = response.status
        self.url = response.url
        try:
            self.body = response.json()
        except (PlaywrightError, ValueError):
            self.body = None

    @property
    def is_success(self) -> bool:
        return self.status is not None and 200 <= self.status < 300

    def require_success(self, message: str) -> None:
        """La llamada debe haber respondido 2xx."""
        if not self.is_success:
            raise ExpectationError(message, expected="2xx", actual=self.status)


class BasePage:
    """
    Base de los page objects.

    Attributes:
        page: Página de Playwright
        base_url: URL base de la aplicación
    """

    def __init__(self, page: Page, base_url: Optional[str] = None):
        self.page = page
        self.base_url = (base_url or settings.BASE_URL).rstrip("/")

    def goto(self, path: str = "/") -> None:
        self.page.goto(f"{self.base_url}{path}")

    def wait_visible(
        self,
        target,
        timeout: int = ELEMENT_TIMEOUT_MS,
        description: str = "",
    ) -> Locator:
        """
        Espera a que el primer elemento del selector sea visible.

        Args:
            target: Selector o Locator
            timeout: Milisegundos de espera
            description: Texto para el mensaje de error

        Returns:
            Locator del primer elemento
        """
        return self._wait(target, "visible", timeout, description)

    def wait_attached(
        self,
        target,
        timeout: int = ELEMENT_TIMEOUT_MS,
        description: str = "",
    ) -> Locator:
        return self._wait(target, "attached", timeout, description)

    def wait_absent(
        self,
        target,
        timeout: int = ELEMENT_TIMEOUT_MS,
        description: str = "",
    ) -> None:
        self._wait(target, "detached", timeout, description)

    def _wait(self, target, state: str, timeout: int, description: str) -> Locator:
        locator = self.page.locator(target) if isinstance(target, str) else target
        locator = locator.first
        try:
            locator.wait_for(state=state, timeout=timeout)
        except PlaywrightTimeoutError as e:
            raise UITimeoutError(
                f"{description or target} no quedó '{state}' en {timeout} ms",
                timeout_ms=timeout,
                original_error=e,
            ) from e
        return locator

    def is_present(self, selector: str) -> bool:
        """Consulta inmediata, sin espera."""
        return self.page.locator(selector).count() > 0

    def check(self, assertion: Callable[[], None], message: str, timeout: int) -> None:
        """
        Ejecuta una aserción de `playwright.sync_api.expect`.

        Playwright la reintenta hasta `timeout`; si aun así falla se
        reporta como UITimeoutError con `message`.

        Uso:
            self.check(
                lambda: expect(boton).to_be_enabled(timeout=ELEMENT_TIMEOUT_MS),
                "El botón de enviar sigue deshabilitado",
                ELEMENT_TIMEOUT_MS,
            )
        """
        try:
            assertion()
        except AssertionError as e:
            if isinstance(e, UITimeoutError):
                raise
            raise UITimeoutError(
                f"{message} (tras {timeout} ms)",
                timeout_ms=timeout,
                original_error=e,
            ) from e

    @contextmanager
    def expect_exchange(
        self,
        method: str,
        pattern: "re.Pattern[str]",
        timeout: int = NETWORK_WAIT_TIMEOUT_MS,
    ) -> Iterator[NetworkExchange]:
        """
        Registra la espera de una llamada de red ANTES de la acción de UI.

        Uso:
            with self.expect_exchange("GET", INVOICES_LIST_PATTERN) as exchange:
                boton.click()
            exchange.require_success("La búsqueda respondió con error")

        Al salir del bloque la respuesta ya llegó y está en `exchange`.
        Los errores de la acción dentro del bloque se propagan tal cual;
        solo el timeout de la espera de red se convierte en UITimeoutError.
        """
        exchange = NetworkExchange(method=method, pattern=pattern)
        action_done = False
        try:
            with self.page.expect_response(exchange.matches, timeout=timeout) as info:
                yield exchange
                action_done = True
            exchange.capture(info.value)
        except PlaywrightTimeoutError as e:
            if not action_done:
                raise
            raise UITimeoutError(
                f"No llegó la llamada {method} {pattern.pattern} en {timeout} ms",
                timeout_ms=timeout,
                original_error=e,
            ) from e
        logger.info(f"📡 {method} {exchange.url} → {exchange.status}")
