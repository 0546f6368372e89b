"""Validador estructural basado en Pydantic.

Evalúa las restricciones declaradas con `Field(...)` en dataclasses o
modelos del dominio y traduce los fallos a `core.errors.ValidationError`.
"""

from __future__ import annotations

import dataclasses
from functools import lru_cache
from typing import Any

from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from core.errors import ValidationError


@lru_cache(maxsize=None)
def _adapter_for(cls: type) -> TypeAdapter[Any]:
    return TypeAdapter(cls)


def _describe(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = ".".join(str(loc) for loc in err.get("loc", ())) or "<root>"
        parts.append(f"{field}: {err.get('msg')}")
    return "; ".join(parts)


class PydanticValidator:
    """Implementa `core.interfaces.transport.StructValidator`."""

    def validate(self, obj: object) -> None:
        try:
            if isinstance(obj, BaseModel):
                type(obj).model_validate(obj.model_dump())
            elif dataclasses.is_dataclass(obj) and not isinstance(obj, type):
                _adapter_for(type(obj)).validate_python(dataclasses.asdict(obj))
            else:
                raise ValidationError(f"cannot validate object of type {type(obj).__name__}")
        except PydanticValidationError as exc:
            raise ValidationError(f"invalid {type(obj).__name__}: {_describe(exc)}") from exc
