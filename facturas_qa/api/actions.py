"""
Acciones HTTP de los steps When

Una llamada por step: ejecuta el request, guarda la respuesta en el
ScenarioContext (sobreescribiendo la anterior) y deja el detalle en el log.
"""

from typing import Any

from config.constants import HttpMethod
from facturas_qa.api.assertions import assert_negative_total_rejected, has_negative_total
from facturas_qa.api.client import InvoiceAPIClient
from facturas_qa.api.context import RecordedResponse, ScenarioContext
from facturas_qa.utils.logger import get_logger, log_json, log_title

logger = get_logger(__name__)


class ApiActions:
    """
    Steps de acción sobre el API de facturas.

    Attributes:
        ctx: Contexto del escenario actual
        client: Cliente HTTP configurado con URL base y token
    """

    def __init__(self, ctx: ScenarioContext, client: InvoiceAPIClient):
        self.ctx = ctx
        self.client = client

    def _perform(
        self,
        method: HttpMethod,
        path: str,
        payload: Any = None,
        with_token: bool = True,
        allow_error_status: bool = False,
    ) -> RecordedResponse:
        label = "con token" if with_token else "sin token"
        logger.info(f"🌐 {method.value} ({label}) → {self.client.url_for(path)}")
        if self.ctx.base_path and not path.startswith(self.ctx.base_path):
            logger.debug(f"La ruta {path} no usa el basePath declarado {self.ctx.base_path}")

        response = self.client.request(
            method.value,
            path,
            payload=payload,
            with_token=with_token,
            allow_error_status=allow_error_status,
        )
        self.ctx.record(response)

        log_title(logger, f"{method.value} {label}: {response.url} ({response.elapsed_ms:.0f} ms)")
        log_json(logger, f"📥 Respuesta {response.status_code}", response.body)
        return response

    def get(self, path: str, with_token: bool = True) -> RecordedResponse:
        """
        GET al API.

        Sin token nunca falla por status: el 401/403 es justo lo que se
        quiere revisar después.
        """
        return self._perform(
            HttpMethod.GET,
            path,
            with_token=with_token,
            allow_error_status=not with_token,
        )

    def post(self, path: str, allow_error_status: bool = False) -> RecordedResponse:
        """
        POST del payload del contexto.

        Si el payload trae `total` negativo, el mismo step exige 422 y
        la propiedad `error` en el body.
        """
        response = self._perform(
            HttpMethod.POST,
            path,
            payload=self.ctx.request_body,
            allow_error_status=allow_error_status,
        )
        if has_negative_total(self.ctx.request_body):
            logger.info("🧪 Caso negativo detectado (total < 0), espero 422 del API…")
            assert_negative_total_rejected(response)
        return response

    def put(self, path: str, allow_error_status: bool = False) -> RecordedResponse:
        """PUT del payload del contexto."""
        return self._perform(
            HttpMethod.PUT,
            path,
            payload=self.ctx.request_body,
            allow_error_status=allow_error_status,
        )

    def delete(self, path: str, allow_error_status: bool = False) -> RecordedResponse:
        """DELETE con token."""
        return self._perform(
            HttpMethod.DELETE,
            path,
            allow_error_status=allow_error_status,
        )
