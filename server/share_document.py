"""
Lectura del documento JSON de shares.

Formato esperado::

    {
      "keys": {"n": 4, "k": 3},
      "1": {"base": "10", "value": "4"},
      "2": {"base": "2", "value": "111"},
      ...
    }

Cada clave distinta de ``keys`` es la coordenada x en decimal. El resultado
es un ``ShareSet`` ya parseado; el núcleo no vuelve a tocar el JSON.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, Union

from server.config import THRESHOLD_FIELD, THRESHOLD_SECTION
from server.errors import ShareDocumentError
from server.shamir_core import UNSIGNED_DECIMAL, Share, ShareSet


def _read_threshold(document: Mapping) -> int:
    section = document.get(THRESHOLD_SECTION)
    if not isinstance(section, Mapping) or THRESHOLD_FIELD not in section:
        raise ShareDocumentError(
            f"Falta el campo obligatorio '{THRESHOLD_SECTION}.{THRESHOLD_FIELD}'."
        )

    raw = section[THRESHOLD_FIELD]
    # se acepta entero JSON o cadena decimal ("3")
    if isinstance(raw, int) and not isinstance(raw, bool):
        threshold = raw
    elif isinstance(raw, str) and UNSIGNED_DECIMAL.fullmatch(raw.strip()):
        threshold = int(raw.strip(), 10)
    else:
        raise ShareDocumentError(f"Umbral k inválido: {raw!r}.")
    if threshold < 1:
        raise ShareDocumentError(f"El umbral k debe ser al menos 1 (es {threshold}).")
    return threshold


def load_share_document(document: Mapping) -> ShareSet:
    """Convierte el diccionario del documento en un ShareSet ordenado por x."""
    if not isinstance(document, Mapping):
        raise ShareDocumentError("El documento de shares debe ser un objeto JSON.")

    threshold = _read_threshold(document)

    shares = []
    for key, entry in document.items():
        if key == THRESHOLD_SECTION:
            continue
        if not isinstance(entry, Mapping):
            raise ShareDocumentError(f"La entrada '{key}' debe ser un objeto con 'base' y 'value'.")
        if "base" not in entry or "value" not in entry:
            raise ShareDocumentError(f"A la entrada '{key}' le falta 'base' o 'value'.")
        shares.append(Share.from_raw(key, entry["base"], entry["value"]))

    return ShareSet(threshold, tuple(shares))


def read_share_file(path: Union[str, Path]) -> ShareSet:
    """Carga un documento de shares desde disco."""
    file_path = Path(path).expanduser()
    with file_path.open("r", encoding="utf-8") as handler:
        try:
            document = json.load(handler)
        except ValueError as exc:
            # JSONDecodeError o UnicodeDecodeError
            raise ShareDocumentError(f"JSON inválido en {file_path}: {exc}")
    return load_share_document(document)
