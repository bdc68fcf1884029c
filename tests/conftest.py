"""
Pytest Configuration and Fixtures

Configuración global de pytest y fixtures compartidos por los
escenarios del API, los escenarios de UI y los tests unitarios.
"""

import sys
from pathlib import Path
from typing import Generator

import pytest

# Agregar el directorio raíz al path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from config.settings import settings
from facturas_qa.api.actions import ApiActions
from facturas_qa.api.client import InvoiceAPIClient
from facturas_qa.api.context import ScenarioContext
from facturas_qa.pages.dashboard_page import DashboardPage
from facturas_qa.pages.invoices_page import InvoicesPage
from facturas_qa.pages.login_page import LoginPage
from facturas_qa.utils.logger import ScenarioLogContext, get_logger, log_exception
from tests.fakes.invoice_api import FakeInvoiceAPI

logger = get_logger(__name__)

_log_context_key = pytest.StashKey[ScenarioLogContext]()


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """En CI un escenario fallido se repite completo (pytest-rerunfailures)."""
    if not config.pluginmanager.hasplugin("rerunfailures"):
        return
    if settings.RERUNS and not config.getoption("reruns", None):
        config.option.reruns = settings.RERUNS


def pytest_collection_modifyitems(config, items):
    """Los escenarios de UI necesitan la app real: solo corren con E2E_LIVE."""
    if settings.E2E_LIVE:
        return
    skip_ui = pytest.mark.skip(reason="Escenario de UI: requiere E2E_LIVE=true")
    for item in items:
        if "ui" in item.keywords:
            item.add_marker(skip_ui)


def pytest_bdd_before_scenario(request, feature, scenario):
    log_context = ScenarioLogContext(feature=feature.name, scenario=scenario.name)
    log_context.__enter__()
    request.node.stash[_log_context_key] = log_context
    logger.info(f"▶️ Escenario: {scenario.name}")


def pytest_bdd_after_scenario(request, feature, scenario):
    log_context = request.node.stash.get(_log_context_key, None)
    if log_context is not None:
        log_context.__exit__(None, None, None)


def pytest_bdd_step_error(step, exception):
    log_exception(logger, f"❌ Falló el paso '{step.name}'", exception)


# ============================================================================
# API FIXTURES
# ============================================================================

@pytest.fixture
def scenario_context() -> ScenarioContext:
    """Contexto vacío por escenario; nunca se comparte."""
    return ScenarioContext()


@pytest.fixture
def fake_invoice_api() -> FakeInvoiceAPI:
    """API de facturas en memoria con los datos semilla."""
    return FakeInvoiceAPI(token=settings.AUTH_TOKEN)


@pytest.fixture
def api_client(fake_invoice_api) -> Generator[InvoiceAPIClient, None, None]:
    """
    Cliente del API.

    Con E2E_LIVE=true apunta a settings.API_BASE_URL; si no, usa el
    API en memoria a través de httpx.MockTransport.
    """
    transport = None if settings.E2E_LIVE else fake_invoice_api.transport()
    client = InvoiceAPIClient(
        base_url=settings.API_BASE_URL,
        token=settings.AUTH_TOKEN,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        transport=transport,
    )
    yield client
    client.close()


@pytest.fixture
def api_actions(scenario_context, api_client) -> ApiActions:
    return ApiActions(scenario_context, api_client)


# ============================================================================
# UI FIXTURES
# ============================================================================

def launch_args(base: dict) -> dict:
    """`--headed` y `--slowmo` de pytest-playwright mandan sobre el perfil."""
    return {
        **base,
        "headless": base.get("headless", True) and settings.HEADLESS,
        "slow_mo": base.get("slow_mo") or settings.SLOW_MO_MS,
    }


def context_args(base: dict) -> dict:
    """URL base, viewport y certificados del ambiente de QA."""
    return {
        **base,
        "base_url": settings.BASE_URL,
        "ignore_https_errors": True,
        "viewport": {
            "width": settings.VIEWPORT_WIDTH,
            "height": settings.VIEWPORT_HEIGHT,
        },
    }


@pytest.fixture(scope="session")
def browser_type_launch_args(browser_type_launch_args):
    return launch_args(browser_type_launch_args)


@pytest.fixture
def browser_context_args(browser_context_args):
    return context_args(browser_context_args)


@pytest.fixture
def login_page(page) -> LoginPage:
    return LoginPage(page, base_url=settings.BASE_URL)


@pytest.fixture
def invoices_page(page) -> InvoicesPage:
    return InvoicesPage(page, base_url=settings.BASE_URL)


@pytest.fixture
def dashboard_page(page) -> DashboardPage:
    return DashboardPage(page, base_url=settings.BASE_URL)


@pytest.fixture
def ui_state() -> dict:
    """Datos que un paso de UI deja para los pasos siguientes del escenario."""
    return {}
