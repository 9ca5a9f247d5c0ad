# domain/normalizers/color.py

from __future__ import annotations

import logging
from typing import Any, Optional, Set

from domain.normalizers.tables import COLOR_TABLE, NormalizationTable

logger = logging.getLogger(__name__)


class ColorNormalizer:
    """
    Couleurs localisées -> 16 noms canoniques anglais ("Schwarz" -> "Black").

    Contrairement à l'état, une couleur inconnue n'est pas rejetée :
    la valeur d'origine (nettoyée des espaces) est renvoyée.
    """

    def __init__(self, table: NormalizationTable = COLOR_TABLE) -> None:
        self._table = table

    @staticmethod
    def _key(raw: Optional[Any]) -> str:
        if raw is None:
            return ""
        return str(raw).strip().lower()

    def normalize(self, raw: Optional[Any]) -> str:
        original = "" if raw is None else str(raw).strip()
        normalized = self._table.get(self._key(raw))
        if normalized is None:
            if original:
                logger.debug("normalize_color: couleur inconnue conservée (%r)", original)
            return original
        return normalized

    def is_known_color(self, raw: Optional[Any]) -> bool:
        key = self._key(raw)
        return bool(key) and key in self._table

    def get_unnormalized_colors(self, canonical_name: Optional[str]) -> Set[str]:
        """
        Recherche inverse : toutes les variantes de la table pour une couleur
        canonique, plus le nom canonique lui-même. Sert à l'expansion des
        recherches multilingues.
        """
        if not canonical_name or not canonical_name.strip():
            return set()
        wanted = canonical_name.strip()
        variants = {wanted}
        for key, value in self._table.entries.items():
            if value.casefold() == wanted.casefold():
                variants.add(key)
        return variants


_DEFAULT_NORMALIZER = ColorNormalizer()


def normalize_color(raw: Optional[Any]) -> str:
    return _DEFAULT_NORMALIZER.normalize(raw)


def is_known_color(raw: Optional[Any]) -> bool:
    return _DEFAULT_NORMALIZER.is_known_color(raw)


def get_unnormalized_colors(canonical_name: Optional[str]) -> Set[str]:
    return _DEFAULT_NORMALIZER.get_unnormalized_colors(canonical_name)
