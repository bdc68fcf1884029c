"""
Tolerancia snake_case / camelCase

El API devuelve a veces `invoice_number` y a veces `invoiceNumber`.
Estas funciones leen el campo sin importar la convención.
"""

from typing import Any, Mapping, Optional


def to_camel(name: str) -> str:
    """Convierte `invoice_number` en `invoiceNumber`."""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def lookup_field(record: Mapping[str, Any], name: str, default: Any = None) -> Any:
    """
    Obtiene un campo probando snake_case y luego camelCase.

    Gana el primer valor no nulo, igual que `a ?? b`.

    Args:
        record: Objeto JSON (dict) de la respuesta
        name: Nombre del campo en snake_case
        default: Valor si ninguna variante trae dato

    Returns:
        Valor encontrado o `default`
    """
    if not isinstance(record, Mapping):
        return default
    for key in (name, to_camel(name)):
        value = record.get(key)
        if value is not None:
            return value
    return default


def record_id(record: Mapping[str, Any]) -> Optional[str]:
    """Id de una factura (`id` o `_id`) como texto sin espacios."""
    if not isinstance(record, Mapping):
        return None
    value = record.get("id")
    if value is None:
        value = record.get("_id")
    if value is None:
        return None
    text = str(value).strip()
    return text or None
