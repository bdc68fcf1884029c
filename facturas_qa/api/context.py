"""
Contexto del Escenario

Registro mutable que comparten los steps Given/When/Then de UN
escenario. Se crea vacío al iniciar el escenario (fixture de pytest)
y se descarta al terminar; nunca se comparte entre escenarios.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Optional

from facturas_qa.utils.errors import ExpectationError, PayloadError


@dataclass
class RecordedResponse:
    """Respuesta HTTP guardada por un step de acción."""

    status_code: int
    body: Any
    elapsed_ms: float
    method: str = "GET"
    url: str = ""

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400

    def to_dict(self) -> dict:
        return {
            "method": self.method,
            "url": self.url,
            "status_code": self.status_code,
            "elapsed_ms": round(self.elapsed_ms, 2),
            "body": self.body,
        }


@dataclass
class ScenarioContext:
    """
    Estado de un escenario en ejecución.

    Attributes:
        base_path: Ruta declarada en el Background (solo para logs)
        request_body: Último payload cargado desde el feature
        last_response: Última respuesta HTTP; cada acción la sobreescribe
    """

    base_path: Optional[str] = None
    request_body: Any = None
    last_response: Optional[RecordedResponse] = None
    history: list = field(default_factory=list)

    def set_base_path(self, path: str) -> None:
        self.base_path = str(path)

    def load_payload(self, doc_string: str) -> Any:
        """
        Parsea el bloque literal del feature como JSON.

        Raises:
            PayloadError: Si el texto no es JSON válido
        """
        try:
            self.request_body = json.loads(doc_string)
        except (TypeError, ValueError) as e:
            raise PayloadError(
                f"El payload del feature no es JSON válido: {e}",
                details={"doc_string": doc_string},
                original_error=e,
            ) from e
        return self.request_body

    def record(self, response: RecordedResponse) -> RecordedResponse:
        """Guarda la respuesta, sobreescribiendo la anterior."""
        self.last_response = response
        self.history.append((response.method, response.url, response.status_code))
        return response

    def require_response(self) -> RecordedResponse:
        """
        Obtiene la última respuesta o falla si ningún step la guardó.

        Raises:
            ExpectationError: Si no hay respuesta en el contexto
        """
        if self.last_response is None:
            raise ExpectationError(
                "No hay respuesta HTTP guardada en el contexto",
                expected="una respuesta registrada",
                actual=None,
            )
        return self.last_response
