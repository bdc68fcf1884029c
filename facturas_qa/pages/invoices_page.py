"""
Page Object: módulo de Facturas

Concentra las acciones de la pantalla de facturas: formulario de
creación, filtros de búsqueda, tabla de resultados y eliminación.

Las acciones que disparan llamadas al API esperan la respuesta
(`expect_exchange`) antes de que el step lea la tabla.
"""

import re
from typing import Any, Dict, List

from playwright.sync_api import Locator, expect
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from config.constants import (
    CONFIRM_DIALOG_TIMEOUT_MS,
    ELEMENT_TIMEOUT_MS,
    INVOICES_CREATE_PATTERN,
    INVOICES_LIST_PATTERN,
    INVOICES_REFRESH_PATTERN,
    TABLE_ROWS_TIMEOUT_MS,
    InvoiceSelectors,
    InvoiceStatus,
)
from facturas_qa.api.fields import lookup_field, record_id
from facturas_qa.pages.base import BasePage
from facturas_qa.pages.matching import (
    DELETED_MARKER,
    DELETED_OR_INACTIVE_MARKER,
    SelectOption,
    StatusStrategy,
    choose_status_option,
    find_created_rows,
    normalize_row_text,
)
from facturas_qa.utils.errors import ExpectationError
from facturas_qa.utils.logger import get_logger

logger = get_logger(__name__)

MODULE_TEXT = re.compile(r"Facturas", re.IGNORECASE)
SUBMIT_TEXT = re.compile(r"Crear factura|Guardar|Crear", re.IGNORECASE)
CONFIRM_TEXT = re.compile(r"^\s*(Eliminar|Confirmar|Sí|Si)\s*$", re.IGNORECASE)


class InvoicesPage(BasePage):
    """Acciones y verificaciones de la pantalla de facturas."""

    # ========================================================================
    # NAVEGACIÓN Y FORMULARIO
    # ========================================================================

    def go_to_module(self) -> None:
        logger.info("📂 Abriendo módulo de Facturas desde el menú…")
        entry = self.page.locator(InvoiceSelectors.MENU_ENTRY).filter(has_text=MODULE_TEXT)
        self.wait_visible(entry, description="La entrada 'Facturas' del menú").click()
        self.wait_visible(
            self.page.get_by_text(MODULE_TEXT),
            description="El título de la pantalla de facturas",
        )

    def click_new(self) -> None:
        logger.info("🆕 Abriendo el formulario para crear una factura…")
        self.wait_visible(InvoiceSelectors.NEW_BTN, description="El botón 'Nueva factura'").click(
            force=True
        )
        self.wait_visible(
            InvoiceSelectors.NUMBER_INPUT,
            description="El campo 'Número de factura'",
        )

    def fill_number(self, number: str) -> None:
        logger.info(f"✏️ Escribiendo número de factura: {number}")
        field = self.wait_visible(InvoiceSelectors.NUMBER_INPUT, description="El campo 'Número de factura'")
        field.fill("")
        field.press_sequentially(number)

    def fill_total(self, total: str) -> None:
        logger.info(f"💲 Escribiendo el total de la factura: {total}")
        field = self.wait_visible(InvoiceSelectors.TOTAL_INPUT, description="El campo 'Total'")
        field.fill("")
        field.press_sequentially(total)

    def _status_options(self) -> List[SelectOption]:
        raw = self.page.locator(f"{InvoiceSelectors.STATUS_SELECT} option").evaluate_all(
            "opts => opts.map(o => ({text: o.textContent || '', value: o.getAttribute('value')}))"
        )
        return [SelectOption(text=o["text"], value=o["value"]) for o in raw]

    def select_status(self, status: str) -> StatusStrategy:
        """
        Selecciona el estado en el formulario.

        Se intenta por texto visible, luego por value y por último la
        segunda opción del select. Queda en el log cuál se usó.

        Returns:
            El intento que resolvió la selección
        """
        logger.info(f"📋 Intentando seleccionar el estado: \"{status}\"…")
        select = self.wait_visible(InvoiceSelectors.STATUS_SELECT, description="El selector de 'Estado'")
        self.wait_attached(
            f"{InvoiceSelectors.STATUS_SELECT} option",
            description="Las opciones del selector de 'Estado'",
        )

        choice = choose_status_option(self._status_options(), status)
        if choice.strategy == StatusStrategy.TEXT:
            logger.info("✅ Encontré la opción por TEXTO visible, la selecciono así.")
            select.select_option(label=choice.option.text.strip(), force=True)
        elif choice.strategy == StatusStrategy.VALUE:
            logger.info("✅ Encontré la opción por VALUE, la selecciono así.")
            select.select_option(value=choice.option.value, force=True)
        else:
            logger.warning(
                "⚠️ No encontré la opción exacta, uso la segunda opción del select: "
                f"{choice.option.text.strip()!r}"
            )
            select.select_option(choice.option.value_or_text, force=True)

        selected = select.locator("option:checked").first.text_content() or ""
        logger.info(f"📋 Estado seleccionado en el form: {selected.strip()}")
        return choice.strategy

    def submit_create(self) -> None:
        logger.info("💾 Enviando el formulario para crear/guardar la factura…")
        button = self.page.locator(InvoiceSelectors.SUBMIT_BTN).filter(has_text=SUBMIT_TEXT)
        button = self.wait_visible(button, description="El botón para guardar la factura")
        button.scroll_into_view_if_needed()
        button.click(force=True)

    def create_invoice(self, number: str, total: str, status: str) -> Dict[str, Any]:
        """
        Crea una factura desde la UI.

        Espera el POST de creación y el GET del listado que la app hace
        después; devuelve el body de la creación.

        Raises:
            UITimeoutError: Si alguna de las dos llamadas no llega
            ExpectationError: Si la creación no respondió 2xx
        """
        logger.info(
            f"🧾 Creando factura desde la UI con: número={number}, total={total}, estado={status}"
        )
        with self.expect_exchange("POST", INVOICES_CREATE_PATTERN) as created:
            with self.expect_exchange("GET", INVOICES_REFRESH_PATTERN):
                self.click_new()
                self.fill_number(number)
                self.fill_total(total)
                self.select_status(status)
                self.submit_create()
        created.require_success(f"La creación de la factura respondió {created.status}")
        return created.body if isinstance(created.body, dict) else {}

    # ========================================================================
    # TABLA
    # ========================================================================

    def table_row_texts(self) -> List[str]:
        rows = self.page.locator(InvoiceSelectors.TABLE_ROWS)
        self.wait_attached(
            rows,
            timeout=TABLE_ROWS_TIMEOUT_MS,
            description="Las filas de la tabla de facturas",
        )
        return rows.all_text_contents()

    def expect_created_row(
        self,
        created: Dict[str, Any],
        fallback_number: str,
        status_text: str = InvoiceStatus.VIGENTE.value,
    ) -> str:
        """
        Busca la factura recién creada en la tabla.

        Una fila coincide si contiene el id creado o el número (en
        minúsculas) Y el estado.

        Args:
            created: Body devuelto por el POST de creación
            fallback_number: Número a usar si el body no lo trae
            status_text: Estado esperado en la fila

        Returns:
            Texto de la primera fila que coincide

        Raises:
            ExpectationError: Con el volcado de todas las filas revisadas
        """
        target_id = record_id(created)
        target_number = str(lookup_field(created, "invoice_number") or fallback_number or "")
        logger.info(f"🆔 id creado por API: {target_id or '(no vino)'}")
        logger.info(f"🔎 número creado por API: {target_number.lower()}")

        texts = self.table_row_texts()
        dump = [normalize_row_text(t) for t in texts]
        logger.info("📋 Filas encontradas en la tabla:\n" + "\n---\n".join(dump))

        matches = find_created_rows(texts, target_id, target_number, status_text)
        if not matches:
            raise ExpectationError(
                f"No se encontró en la tabla la factura recién creada "
                f"(id=\"{target_id or ''}\" o número=\"{target_number.lower()}\" "
                f"y estado \"{status_text}\")",
                expected=status_text,
                actual=dump,
            )
        logger.info(f"✅ La factura recién creada aparece en la tabla con estado {status_text}.")
        return matches[0]

    def row_by_number(self, number: str) -> Locator:
        return self.page.locator(InvoiceSelectors.ROW).filter(has_text=number).first

    def expect_row_visible(self, number: str) -> None:
        self.wait_visible(self.row_by_number(number), description=f"La fila de la factura {number}")

    # ========================================================================
    # BÚSQUEDA
    # ========================================================================

    def _click_search(self, what: str) -> None:
        with self.expect_exchange("GET", INVOICES_LIST_PATTERN) as exchange:
            self.wait_visible(InvoiceSelectors.SEARCH_BTN, description="El botón 'Buscar'").click(
                force=True
            )
        exchange.require_success(f"La búsqueda {what} respondió {exchange.status}")

    def set_include_deleted_and_search(self) -> None:
        logger.info("🗑️ Activando 'Incluir facturas eliminadas' y buscando…")
        checkbox = self.wait_visible(
            InvoiceSelectors.SHOW_DELETED,
            description="El checkbox 'Incluir facturas eliminadas'",
        )
        if not checkbox.is_checked():
            checkbox.check(force=True)
        self._click_search("con 'incluir eliminadas'")

    def expect_deleted_visible(self) -> None:
        logger.info("🔍 Buscando una factura que aparezca como eliminada/inactiva…")
        self.wait_attached(
            self.page.get_by_text(DELETED_OR_INACTIVE_MARKER),
            description="Una factura marcada como eliminada/inactiva",
        )

    def search_by_number(self, number: str) -> None:
        logger.info(f"🔎 Buscando la factura con número: {number}")
        field = self.wait_visible(InvoiceSelectors.SEARCH_INPUT, description="El campo de búsqueda")
        field.fill("")
        field.press_sequentially(number)
        self._click_search("por número")

    # ========================================================================
    # ELIMINACIÓN
    # ========================================================================

    def delete_by_number(self, number: str) -> None:
        """
        Pulsa el botón de eliminar de la fila y confirma si aparece un diálogo.

        Un `confirm()` nativo se acepta; un modal de la app se confirma
        si aparece dentro de CONFIRM_DIALOG_TIMEOUT_MS. El handler del
        diálogo nativo solo vive mientras dura esta acción.
        """
        logger.info(f"🗑️ Eliminando la factura con número: {number}")
        row = self.wait_visible(self.row_by_number(number), description=f"La fila de la factura {number}")

        def accept(dialog) -> None:
            dialog.accept()

        self.page.on("dialog", accept)
        try:
            row.locator(InvoiceSelectors.DELETE_BTN).first.click(force=True)
            self._confirm_modal()
        finally:
            self.page.remove_listener("dialog", accept)

    def _confirm_modal(self) -> None:
        confirm = (
            self.page.locator(InvoiceSelectors.CONFIRM_MODAL)
            .locator(InvoiceSelectors.CONFIRM_BTN)
            .filter(has_text=CONFIRM_TEXT)
            .first
        )
        try:
            confirm.wait_for(state="visible", timeout=CONFIRM_DIALOG_TIMEOUT_MS)
        except PlaywrightTimeoutError:
            logger.debug("Sin modal de confirmación")
            return
        confirm.click(force=True)

    def expect_deleted_or_absent(self, number: str, timeout: int = ELEMENT_TIMEOUT_MS) -> None:
        """
        La fila ya no está, o sigue pero marcada como Eliminada/Eliminado.

        Playwright reintenta hasta `timeout` que no quede ninguna fila
        de la factura sin la marca.

        Raises:
            UITimeoutError: Si al vencer el timeout la fila sigue sin marca
        """
        logger.info(
            f"✅ Verificando que la factura \"{number}\" ya no esté o esté marcada como eliminada…"
        )
        pending = self.row_by_number(number).filter(has_not_text=DELETED_MARKER)
        self.check(
            lambda: expect(pending).to_have_count(0, timeout=timeout),
            f"La factura {number} sigue en la tabla sin marca de eliminada",
            timeout,
        )
        logger.info("✅ La factura ya no aparece sin marca de eliminada.")
