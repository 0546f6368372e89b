"""Exportación JSON de los registros anuales.

Por qué JSON:
- Interoperabilidad con hojas de cálculo/pipelines.
- Los valores se escriben como texto, igual que en el wire, para no perder
  precisión al exportar.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import ClimateDataList


def export_annual_data_json(*, data: ClimateDataList, output_path: Path) -> Path:
    """Exporta `ClimateDataList` a JSON UTF-8 con formato estable."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    payload = data.model_dump(mode="json")
    output_path.write_text(
        json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n",
        encoding="utf-8",
    )
    return output_path
