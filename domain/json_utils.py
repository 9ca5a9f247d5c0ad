# domain/json_utils.py

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Mapping, Union

logger = logging.getLogger(__name__)

JsonDocument = Union[bytes, bytearray, str, Mapping[str, Any]]


def parse_json_document(document: JsonDocument) -> Dict[str, Any]:
    """
    Parse un document JSON fourni au démarrage (bytes, texte ou dict déjà décodé).

    Stratégie :
    1) mapping déjà décodé : copie superficielle
    2) bytes : décodage UTF-8 (BOM toléré)
    3) json.loads sur le texte
    4) sinon : ValueError
    """
    if document is None:
        raise ValueError("Document JSON vide (None).")

    if isinstance(document, Mapping):
        logger.debug("parse_json_document: mapping déjà décodé (%d clés)", len(document))
        return dict(document)

    if isinstance(document, (bytes, bytearray)):
        try:
            text = bytes(document).decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            logger.error("parse_json_document: document non UTF-8 (%s)", exc)
            raise ValueError(f"Document non décodable en UTF-8: {exc}") from exc
    elif isinstance(document, str):
        text = document.lstrip("\ufeff")
    else:
        raise ValueError(f"Type de document non supporté: {type(document).__name__}")

    raw = text.strip()
    logger.debug("parse_json_document: début, longueur=%d", len(raw))
    if not raw:
        raise ValueError("Document JSON vide.")

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        logger.error("parse_json_document: JSON invalide (%s). Contenu tronqué: %s", exc, raw[:300])
        raise ValueError(f"JSON invalide: {exc}") from exc
    except RecursionError as exc:
        logger.error("parse_json_document: imbrication JSON trop profonde (longueur=%d)", len(raw))
        raise ValueError("JSON trop profondément imbriqué.") from exc

    if not isinstance(parsed, dict):
        raise ValueError(f"Objet JSON attendu à la racine, reçu {type(parsed).__name__}.")

    logger.debug("parse_json_document: parse OK (dict keys=%s)", list(parsed.keys()))
    return parsed
