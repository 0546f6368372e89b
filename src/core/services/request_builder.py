"""Construcción de requests GET contra el endpoint base.

Puro: no hace I/O. Resuelve un path relativo contra la URL base o acepta una
URL absoluta tal cual, y adjunta el deadline del llamador a la request.
"""

from __future__ import annotations

import re

import httpx

from core.errors import InvalidURLError

# `%` que no abre un escape `%XX` válido. httpx lo re-codifica en silencio.
_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _parse(raw: str) -> httpx.URL:
    if _BAD_PERCENT_ESCAPE.search(raw):
        raise InvalidURLError(f"malformed percent-escape in URL {raw!r}")
    try:
        return httpx.URL(raw)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidURLError(f"cannot parse URL {raw!r}: {exc}") from exc


def resolve_url(base_url: str, path_or_url: str) -> httpx.URL:
    """Devuelve la URL final.

    - Con scheme y host: absoluta, se usa sin tocar (la base se ignora).
    - Sin ambos (incluye `//host/x`): relativa, se concatena a la base con
      exactamente un `/` entre medias.

    Los segmentos `.` y `..` se resuelven (RFC 3986 5.2.4) al parsear, así
    que `base + p` se cumple literalmente solo para paths sin ellos.
    """

    candidate = _parse(path_or_url)
    if candidate.scheme and candidate.host:
        return candidate

    joined = base_url.rstrip("/") + "/" + path_or_url.lstrip("/")
    return _parse(joined)


def build_get_request(
    base_url: str,
    path_or_url: str,
    *,
    timeout: float | None = None,
) -> httpx.Request:
    """Crea un GET listo para `transport.send`.

    `timeout` (segundos) viaja en la extensión `timeout` de la request, que
    httpx aplica en el envío. Sin `timeout` no hay deadline: la task se
    puede cancelar igualmente desde fuera.
    """

    url = resolve_url(base_url, path_or_url)
    extensions: dict[str, object] = {}
    if timeout is not None:
        extensions["timeout"] = httpx.Timeout(timeout).as_dict()
    return httpx.Request("GET", url, extensions=extensions)
