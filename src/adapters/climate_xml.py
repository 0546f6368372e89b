"""Codec XML del endpoint `annualavg` del Climate Data API.

Forma del wire (World Bank, representación `.xml`):

    <list>
      <domain.web.AnnualGcmDatum>
        <gcm>bccr_bcm2_0</gcm>
        <variable>pr</variable>
        <fromYear>1980</fromYear>
        <toYear>1999</toYear>
        <annualData>
          <double>988.8454972331014</double>
        </annualData>
      </domain.web.AnnualGcmDatum>
      ...
    </list>

Está en adapters porque es un detalle del formato del upstream; el Core solo
conoce `ClimateDataList`.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from pydantic import ValidationError as PydanticValidationError

from core.domain.models import ClimateDataList, ClimateDataPoint
from core.errors import DecodeError

ROOT_TAG = "list"
DATUM_TAG = "domain.web.AnnualGcmDatum"


def _optional_text(node: ET.Element, path: str) -> str | None:
    text = node.findtext(path)
    if text is None:
        return None
    text = text.strip()
    return text or None


def _decode_datum(node: ET.Element, index: int) -> ClimateDataPoint:
    raw_value = _optional_text(node, "annualData/double")
    if raw_value is None:
        raise DecodeError(f"datum #{index} has no annualData/double value")

    try:
        return ClimateDataPoint(
            year=_optional_text(node, "fromYear"),
            to_year=_optional_text(node, "toYear"),
            gcm=_optional_text(node, "gcm"),
            variable=_optional_text(node, "variable"),
            value=raw_value,
        )
    except PydanticValidationError as exc:
        raise DecodeError(f"datum #{index} is not a valid annual record: {exc}") from exc


def decode_annual_data(body: bytes | str) -> ClimateDataList:
    """Decodifica el body en una `ClimateDataList` (orden del wire).

    `<list/>` o un body en blanco son "sin datos", no un error.
    """

    if not body or not body.strip():
        return ClimateDataList()

    try:
        root = ET.fromstring(body)
    except ET.ParseError as exc:
        raise DecodeError(f"malformed XML: {exc}") from exc

    if root.tag != ROOT_TAG:
        raise DecodeError(f"unexpected root element <{root.tag}>, expected <{ROOT_TAG}>")

    points: list[ClimateDataPoint] = []
    for index, node in enumerate(root):
        if node.tag != DATUM_TAG:
            raise DecodeError(f"unexpected element <{node.tag}> at position {index}")
        points.append(_decode_datum(node, index))
    return ClimateDataList(points=points)


def encode_annual_data(data: ClimateDataList) -> bytes:
    """Serializa en la misma forma que devuelve el upstream."""

    root = ET.Element(ROOT_TAG)
    for point in data.points:
        datum = ET.SubElement(root, DATUM_TAG)
        if point.gcm is not None:
            ET.SubElement(datum, "gcm").text = point.gcm
        if point.variable is not None:
            ET.SubElement(datum, "variable").text = point.variable
        ET.SubElement(datum, "fromYear").text = str(point.year)
        if point.to_year is not None:
            ET.SubElement(datum, "toYear").text = str(point.to_year)
        annual = ET.SubElement(datum, "annualData")
        ET.SubElement(annual, "double").text = point.value
    return ET.tostring(root, encoding="utf-8")
