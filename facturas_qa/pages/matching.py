"""
Decisiones de los Page Objects que no dependen del navegador

Aquí vive la lógica que los page objects aplican sobre lo que leen del
DOM: qué opción del select de estado elegir, qué fila de la tabla
corresponde a la factura creada y cómo se escribe el total en el
formulario.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from facturas_qa.utils.errors import ExpectationError


# ============================================================================
# SELECT DE ESTADO
# ============================================================================

class StatusStrategy(str, Enum):
    """Intento que resolvió la selección, en orden de prioridad."""
    TEXT = "text"
    VALUE = "value"
    SECOND_OPTION = "second_option"


@dataclass
class SelectOption:
    text: str
    value: Optional[str] = None

    @property
    def value_or_text(self) -> str:
        return self.value if self.value is not None else self.text.strip()


@dataclass
class StatusChoice:
    strategy: StatusStrategy
    option: SelectOption


def choose_status_option(options: Sequence[SelectOption], wanted: str) -> StatusChoice:
    """
    Elige la opción del select de estado.

    Orden fijo:
    1. texto visible igual a `wanted`
    2. atributo value igual a `wanted`
    3. la segunda opción disponible

    Las comparaciones ignoran mayúsculas y espacios alrededor. El tercer
    intento puede ocultar un estado mal escrito; se loggea cuál se usó.

    Raises:
        ExpectationError: Si no hay coincidencia y hay menos de dos opciones
    """
    wanted_lower = wanted.strip().lower()

    for option in options:
        if option.text.strip().lower() == wanted_lower:
            return StatusChoice(StatusStrategy.TEXT, option)

    for option in options:
        if (option.value or "").strip().lower() == wanted_lower:
            return StatusChoice(StatusStrategy.VALUE, option)

    if len(options) < 2:
        raise ExpectationError(
            f"No existe la opción '{wanted}' y el select no tiene segunda opción",
            expected=wanted,
            actual=[o.text for o in options],
        )
    return StatusChoice(StatusStrategy.SECOND_OPTION, options[1])


# ============================================================================
# FILAS DE LA TABLA
# ============================================================================

def normalize_row_text(text: Optional[str]) -> str:
    return (text or "").lower().strip()


def find_created_rows(
    row_texts: Iterable[str],
    target_id: Optional[str],
    target_number: Optional[str],
    status_text: str = "vigente",
) -> List[str]:
    """
    Filas que contienen (id O número) Y el texto del estado.

    Args:
        row_texts: textContent de cada fila
        target_id: Id devuelto por el API (puede faltar)
        target_number: Número de factura (se compara en minúsculas)
        status_text: Estado que debe aparecer en la fila

    Returns:
        Textos normalizados de las filas que coinciden
    """
    target_id = (target_id or "").strip().lower()
    target_number = (target_number or "").strip().lower()
    status_text = status_text.lower()

    matches = []
    for raw in row_texts:
        text = normalize_row_text(raw)
        by_id = bool(target_id) and target_id in text
        by_number = bool(target_number) and target_number in text
        if (by_id or by_number) and status_text in text:
            matches.append(text)
    return matches


# Marcas de una factura dada de baja en la tabla
DELETED_MARKER = re.compile(r"Eliminad[oa]", re.IGNORECASE)
DELETED_OR_INACTIVE_MARKER = re.compile(r"Eliminad[oa]|Inactiv[oa]", re.IGNORECASE)


# ============================================================================
# FORMULARIO
# ============================================================================

def format_amount(value: float) -> str:
    """
    Texto que se escribe en el input del total.

    Sin notación científica ni redondeo: 1234567.0 → "1234567",
    100.1234567 → "100.1234567".
    """
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)
