"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta y documentación autocontenida (Field) sin acoplar
  el Core a librerías de I/O.
- El valor anual viaja como texto para no pasar por `float` antes de tiempo.

Nota:
- `AnnualRainfallArgs` es un dataclass plano: construirlo NO valida. Las
  restricciones se declaran aquí y las evalúa el validador inyectado.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Annotated

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from core.errors import NumericParseError

YEAR_PATTERN = r"^[0-9]{4}$"
COUNTRY_ISO3_PATTERN = r"^[A-Za-z]{3}$"


class ClimateDataPoint(BaseModel):
    """Un registro anual promedio devuelto por el upstream.

    Por qué `value` es `str`:
    - El wire lo codifica como texto decimal; convertirlo a `float` aquí
      introduciría error binario antes de la agregación.
    """

    model_config = ConfigDict(frozen=True)

    year: int = Field(
        ...,
        description="Primer año del periodo cubierto (wire `fromYear`).",
    )
    to_year: int | None = Field(
        default=None,
        description="Último año del periodo (wire `toYear`). None = un solo año.",
    )
    gcm: str | None = Field(
        default=None,
        description="Modelo de circulación general que produjo el dato.",
    )
    variable: str | None = Field(
        default=None,
        description="Variable climática (p.ej. 'pr' para precipitación).",
    )
    value: str = Field(
        ...,
        description="Valor decimal en texto (wire `annualData/double`).",
    )

    @property
    def end_year(self) -> int:
        return self.to_year if self.to_year is not None else self.year

    def decimal_value(self) -> Decimal:
        """Parsea `value` con semántica decimal exacta."""

        try:
            parsed = Decimal(self.value.strip())
        except InvalidOperation as exc:
            raise NumericParseError(f"invalid decimal value {self.value!r} for year {self.year}") from exc
        if not parsed.is_finite():
            raise NumericParseError(f"non-finite decimal value {self.value!r} for year {self.year}")
        return parsed

    def overlaps(self, from_year: int, to_year: int) -> bool:
        """True si el periodo del registro intersecta `[from_year, to_year]`."""

        return self.year <= to_year and self.end_year >= from_year


class ClimateDataList(BaseModel):
    """Secuencia ordenada (orden del wire) de `ClimateDataPoint`.

    Vacía es un estado válido: "no hay datos para ese alcance".
    """

    model_config = ConfigDict(frozen=True)

    points: tuple[ClimateDataPoint, ...] = Field(
        default_factory=tuple,
        description="Registros en el orden en que llegaron.",
    )

    def __len__(self) -> int:
        return len(self.points)


@dataclass(frozen=True)
class AnnualRainfallArgs:
    """Argumentos de consulta (año desde, año hasta, país ISO3).

    `from_ccyy <= to_ccyy` no se comprueba: el rango se usa literal.
    """

    from_ccyy: Annotated[str, Field(pattern=YEAR_PATTERN)]
    to_ccyy: Annotated[str, Field(pattern=YEAR_PATTERN)]
    country_iso: Annotated[str, Field(min_length=3, max_length=3, pattern=COUNTRY_ISO3_PATTERN)]

    @classmethod
    def from_years(cls, from_year: int, to_year: int, country_code: str) -> AnnualRainfallArgs:
        return cls(from_ccyy=str(from_year), to_ccyy=str(to_year), country_iso=country_code)
