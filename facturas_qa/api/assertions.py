"""
Validaciones sobre la última respuesta del escenario

Cada función lee el ScenarioContext y lanza ExpectationError con
un mensaje que nombra lo esperado y lo recibido. No hay reintentos.
"""

from numbers import Number
from typing import Any, Iterable, List, Sequence

from config.constants import INVOICE_REFLECTED_FIELDS, NEGATIVE_TOTAL_STATUS
from facturas_qa.api.context import RecordedResponse, ScenarioContext
from facturas_qa.api.fields import lookup_field
from facturas_qa.utils.errors import ExpectationError
from facturas_qa.utils.logger import get_logger

logger = get_logger(__name__)


_MISSING = object()


def coerce_expected(raw: str) -> Any:
    """Las celdas "true"/"false" de una tabla Gherkin se vuelven booleanos."""
    if raw == "true":
        return True
    if raw == "false":
        return False
    return raw


def strict_equals(actual: Any, expected: Any) -> bool:
    """
    Igualdad que también compara tipos.

    `True` no es igual a `1` ni `False` a `0`; entre números sí vale
    `100 == 100.0`. Listas y objetos se comparan elemento a elemento.
    """
    if isinstance(actual, bool) or isinstance(expected, bool):
        return isinstance(actual, bool) and isinstance(expected, bool) and actual == expected
    if isinstance(actual, Number) and isinstance(expected, Number):
        return actual == expected
    if isinstance(actual, list) and isinstance(expected, list):
        return len(actual) == len(expected) and all(
            strict_equals(a, e) for a, e in zip(actual, expected)
        )
    if isinstance(actual, dict) and isinstance(expected, dict):
        return actual.keys() == expected.keys() and all(
            strict_equals(actual[k], expected[k]) for k in actual
        )
    return type(actual) is type(expected) and actual == expected


def _require_body_object(response: RecordedResponse) -> dict:
    if not isinstance(response.body, dict):
        raise ExpectationError(
            "La respuesta no tiene body JSON de tipo objeto",
            expected="objeto JSON",
            actual=response.body,
        )
    return response.body


def assert_status(ctx: ScenarioContext, expected: int) -> None:
    """El status debe ser exactamente `expected`."""
    response = ctx.require_response()
    if response.status_code != expected:
        raise ExpectationError(
            "El código de estado no coincide",
            expected=expected,
            actual=response.status_code,
            details={"body": response.body},
        )


def assert_status_in(ctx: ScenarioContext, first: int, second: int) -> None:
    """
    El status debe ser uno de los DOS valores dados.

    Es pertenencia a un conjunto, no un rango: con [400, 422] un 410 falla.
    """
    response = ctx.require_response()
    allowed = (first, second)
    if response.status_code not in allowed:
        raise ExpectationError(
            "El status no está en el rango esperado",
            expected=list(allowed),
            actual=response.status_code,
            details={"body": response.body},
        )


def assert_array_property(ctx: ScenarioContext, prop: str) -> List[Any]:
    """El body debe tener `prop` y debe ser una lista (vacía es válida)."""
    body = _require_body_object(ctx.require_response())
    if prop not in body:
        raise ExpectationError(
            f"La respuesta no tiene la propiedad '{prop}'",
            expected=prop,
            actual=sorted(body.keys()),
        )
    value = body[prop]
    if not isinstance(value, list):
        raise ExpectationError(
            f"La propiedad {prop} existe pero no es un arreglo",
            expected="list",
            actual=type(value).__name__,
        )
    return value


def assert_first_element_fields(
    ctx: ScenarioContext,
    prop: str,
    rows: Iterable[Sequence[str]],
) -> bool:
    """
    Si `body[prop]` tiene elementos, el primero debe tener cada campo de la tabla.

    Args:
        ctx: Contexto del escenario
        prop: Propiedad con el arreglo (ej. "invoices")
        rows: Filas [campo, valor esperado] de la tabla Gherkin

    Returns:
        False si la validación se omitió porque el arreglo vino vacío
    """
    response = ctx.require_response()
    body = response.body if isinstance(response.body, dict) else {}
    items = body.get(prop)

    if not isinstance(items, list) or not items:
        logger.info(f"ℹ️ '{prop}' vino vacío; no se hace validación de campos.")
        return False

    first = items[0]
    if not isinstance(first, dict):
        raise ExpectationError(
            f"El primer elemento de '{prop}' no es un objeto",
            expected="objeto JSON",
            actual=first,
        )

    for row in rows:
        key, raw_expected = row[0], row[1]
        expected = coerce_expected(raw_expected)
        actual = first.get(key, _MISSING)
        if actual is _MISSING:
            raise ExpectationError(
                "El primer elemento no trae el campo esperado",
                expected=key,
                actual=sorted(first.keys()),
            )
        if not strict_equals(actual, expected):
            raise ExpectationError(
                f"El campo {key} no coincide con lo esperado",
                expected=expected,
                actual=actual,
            )
    return True


def assert_payload_reflected(ctx: ScenarioContext) -> None:
    """
    La respuesta debe devolver los campos del payload enviado.

    Acepta `invoice_number`/`invoiceNumber` e `invoice_date`/`invoiceDate`
    indistintamente; `total`, `status` y `active` se comparan tal cual.
    """
    if not isinstance(ctx.request_body, dict):
        raise ExpectationError(
            "No hay payload cargado en el contexto",
            expected="payload JSON de tipo objeto",
            actual=ctx.request_body,
        )
    body = _require_body_object(ctx.require_response())

    for field_name in INVOICE_REFLECTED_FIELDS:
        sent = ctx.request_body.get(field_name)
        returned = lookup_field(body, field_name)
        if not strict_equals(returned, sent):
            raise ExpectationError(
                f"El campo '{field_name}' no coincide con el payload",
                expected=sent,
                actual=returned,
            )


def assert_property_value(ctx: ScenarioContext, prop: str, value: Any) -> None:
    """El body debe tener exactamente la pareja propiedad/valor."""
    body = _require_body_object(ctx.require_response())
    actual = body.get(prop, _MISSING)
    if actual is _MISSING:
        raise ExpectationError(
            f"La respuesta no tiene la propiedad '{prop}'",
            expected={prop: value},
            actual=body,
        )
    if not strict_equals(actual, value):
        raise ExpectationError(
            f"La propiedad '{prop}' no tiene el valor esperado",
            expected=value,
            actual=actual,
        )


def has_negative_total(payload: Any) -> bool:
    """True si el payload trae un `total` numérico (no booleano) menor que cero."""
    if not isinstance(payload, dict):
        return False
    total = payload.get("total")
    return isinstance(total, Number) and not isinstance(total, bool) and total < 0


def assert_negative_total_rejected(response: RecordedResponse) -> None:
    """Un total negativo debe responder 422 con la propiedad `error`."""
    if response.status_code != NEGATIVE_TOTAL_STATUS:
        raise ExpectationError(
            "El API debe responder 422 cuando el total es negativo",
            expected=NEGATIVE_TOTAL_STATUS,
            actual=response.status_code,
            details={"body": response.body},
        )
    if not isinstance(response.body, dict) or "error" not in response.body:
        raise ExpectationError(
            "El cuerpo debe traer la propiedad 'error'",
            expected="error",
            actual=response.body,
        )
