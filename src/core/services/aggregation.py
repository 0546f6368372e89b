"""Agregación de registros anuales.

Toda la aritmética es `Decimal`: el único paso con pérdida es la conversión a
`float` que hace el cliente al devolver el resultado.
"""

from __future__ import annotations

import logging
from decimal import Decimal, DecimalException

from core.domain.models import ClimateDataList
from core.errors import EmptyDatasetError, NumericParseError

logger = logging.getLogger(__name__)


def average_in_range(data: ClimateDataList, from_year: int, to_year: int) -> Decimal:
    """Media aritmética exacta de los registros que solapan `[from_year, to_year]`.

    Un upstream bien acotado ya devuelve solo ese rango, así que el filtro
    normalmente no descarta nada.
    """

    selected = [point for point in data.points if point.overlaps(from_year, to_year)]
    if not selected:
        raise EmptyDatasetError(f"no data points between {from_year} and {to_year}")

    dropped = len(data.points) - len(selected)
    if dropped:
        logger.debug("Discarded %d point(s) outside %d-%d", dropped, from_year, to_year)

    values = [point.decimal_value() for point in selected]
    try:
        total = sum(values, Decimal(0))
        return total / Decimal(len(values))
    except DecimalException as exc:
        raise NumericParseError(
            f"cannot average {len(values)} value(s) between {from_year} and {to_year}: {exc!r}"
        ) from exc
