"""
Page Object: pantalla principal después del login
"""

import re

from config.constants import ELEMENT_TIMEOUT_MS
from facturas_qa.pages.base import BasePage

DASHBOARD_TEXT = re.compile(r"Dashboard|Inicio|Bienvenido|Resumen", re.IGNORECASE)


class DashboardPage(BasePage):
    def expect_loaded(self) -> None:
        """Algún texto de bienvenida o título debe verse."""
        self.wait_visible(
            self.page.get_by_text(DASHBOARD_TEXT),
            timeout=ELEMENT_TIMEOUT_MS,
            description="El título del dashboard",
        )
