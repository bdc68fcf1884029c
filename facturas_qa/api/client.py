"""
Cliente HTTP del API de facturas

Envuelve httpx para que cada llamada devuelva una `RecordedResponse`
con status, body (JSON o texto) y tiempo en milisegundos.

Uso:
    client = InvoiceAPIClient(
        base_url="https://candidates-api.contalink.com",
        token="UXTY789@!!1",
    )
    response = client.request("GET", "/V1/invoices?page=1")
"""

import time
from typing import Any, Dict, Optional

import httpx

from facturas_qa.api.context import RecordedResponse
from facturas_qa.utils.errors import UnexpectedStatusError
from facturas_qa.utils.logger import get_logger, log_performance

logger = get_logger(__name__)


class InvoiceAPIClient:
    """
    Cliente síncrono contra `{base_url}{path}`.

    Características:
    - Header Authorization con el token tal cual (sin prefijo Bearer)
    - Content-Type JSON en operaciones de escritura
    - Falla con UnexpectedStatusError en 4xx/5xx salvo que se permita
    - Transporte inyectable (httpx.MockTransport en pruebas offline)
    """

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = 20.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Inicializa el cliente.

        Args:
            base_url: URL base del API (sin '/' final)
            token: Valor del header Authorization
            timeout: Timeout por request en segundos
            transport: Transporte httpx alternativo
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def url_for(self, path: str) -> str:
        """La ruta del step se concatena literal, query string incluida."""
        return f"{self.base_url}{path}"

    def _headers(self, with_token: bool, has_body: bool) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if with_token and self.token:
            headers["Authorization"] = self.token
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    def request(
        self,
        method: str,
        path: str,
        payload: Any = None,
        with_token: bool = True,
        allow_error_status: bool = False,
    ) -> RecordedResponse:
        """
        Ejecuta un request y lo convierte en RecordedResponse.

        Args:
            method: GET, POST, PUT o DELETE
            path: Ruta literal del step (ej. "/V1/invoices?page=1")
            payload: Body JSON para POST/PUT
            with_token: Enviar o no el header Authorization
            allow_error_status: No fallar en 4xx/5xx

        Returns:
            RecordedResponse

        Raises:
            UnexpectedStatusError: Si el status es >= 400 y no se permitió
            httpx.HTTPError: Errores de red (timeout, conexión)
        """
        method = method.upper()
        url = self.url_for(path)
        has_body = method in ("POST", "PUT")

        started = time.perf_counter()
        response = self._client.request(
            method,
            url,
            headers=self._headers(with_token, has_body),
            json=payload if has_body else None,
        )
        elapsed_ms = (time.perf_counter() - started) * 1000
        log_performance(logger, f"{method} {path}", elapsed_ms)

        recorded = RecordedResponse(
            status_code=response.status_code,
            body=self._parse_body(response),
            elapsed_ms=elapsed_ms,
            method=method,
            url=url,
        )

        if recorded.is_error and not allow_error_status:
            raise UnexpectedStatusError(
                f"{method} {url} respondió {recorded.status_code} y el step no permite errores",
                status_code=recorded.status_code,
                body=recorded.body,
            )

        return recorded

    @staticmethod
    def _parse_body(response: httpx.Response) -> Any:
        """Body como JSON si se puede; si no, texto crudo."""
        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            return response.text

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "InvoiceAPIClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
