# domain/normalizers/attributes.py

"""
Reclassification des attributs ambigus.

Les plateformes publient souvent un attribut "size"/"Größe" qui contient en
réalité un stockage ("128gb"), une RAM ("8gb"), une batterie ("4500mAh") ou
une diagonale d'écran ("6.1 zoll"). On remet chaque valeur sous la bonne clé
avec une unité uniforme.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Mapping, Optional, Tuple

from domain.normalizers.color import ColorNormalizer

logger = logging.getLogger(__name__)

STORAGE_KEYS = {"storage", "storage_size", "ram", "ram_size"}
SIZE_KEYS = {"size", "größe", "grösse", "groeße", "groesse"}
CLOTHING_SIZES = {"XS", "S", "M", "L", "XL", "XXL"}

RAM_MAX_GB = 16
RAM_EXTRA_GB = {24}
STORAGE_STEPS = {32, 64, 128, 256, 512, 1000, 1024}

_DIGITS_RE = re.compile(r"^[0-9]+$")
_LEADING_INT_RE = re.compile(r"^([0-9]+)")
_SCREEN_MARKERS = ("inches", "inch", "zoll", "''")


def _compact_units(value: str) -> str:
    return value.replace(" ", "").replace("gigabyte", "gb").replace("terabyte", "tb")


class AttributeClassifier:
    """
    Reclasse une paire (clé, valeur) d'attribut en une paire sémantiquement
    correcte. Déterministe, une seule passe, ne lève jamais d'exception.
    """

    def __init__(self, color_normalizer: Optional[ColorNormalizer] = None) -> None:
        self._colors = color_normalizer or ColorNormalizer()

    def classify(self, key: Optional[str], value: Optional[Any]) -> Tuple[str, str]:
        key = key or ""
        value = "" if value is None else str(value)
        if not key.strip() or not value.strip():
            return key, value.strip()

        k = key.strip().lower()

        if k == "color":
            return key, self._colors.normalize(value)

        if k in STORAGE_KEYS:
            v = _compact_units(value.strip().lower())
            if _DIGITS_RE.match(v):
                v += "gb"  # "64" -> "64gb"
            return k.replace("_size", ""), v.upper()

        if k in SIZE_KEYS:
            return self._classify_size(value)

        return key, value.strip()

    def _classify_size(self, value: str) -> Tuple[str, str]:
        original = value.strip()
        v = _compact_units(original.lower())
        num_only = "".join(ch for ch in v if ch.isdigit() or ch == ".")

        # Tailles vélo (56cm) et vêtements : on garde "size".
        if (v.endswith("cm") and len(num_only) == 2) or (len(v) <= 3 and v.upper() in CLOTHING_SIZES):
            return "size", original

        if v.endswith("mah") or v.endswith("mahakku"):
            return "battery", v.replace("akku", "").upper().replace("MAH", "mAh")

        if v.endswith("gb") or v.endswith("tb") or (_DIGITS_RE.match(v) and len(v) <= 4):
            match = _LEADING_INT_RE.match(v)
            if match:
                return self._classify_capacity(int(match.group(1)), v)

        if '"' in v or "zoll" in v or "inches" in v:
            screen = v
            for marker in _SCREEN_MARKERS:
                screen = screen.replace(marker, '"')
            screen = re.sub(r'"+', '"', screen)
            return "screen_size", screen

        logger.debug("classify_attribute: taille conservée telle quelle (%r)", original)
        return "size", original

    @staticmethod
    def _classify_capacity(num: int, v: str) -> Tuple[str, str]:
        is_tb = v.endswith("tb")
        if (num <= RAM_MAX_GB or num in RAM_EXTRA_GB) and v.endswith("gb"):
            return "ram", f"{num}GB"
        if num in STORAGE_STEPS:
            amount = 1 if num in (1000, 1024) else num
            unit = "TB" if num >= 1000 or is_tb else "GB"
            return "storage", f"{amount}{unit}"
        return "storage", f"{num}{'TB' if is_tb else 'GB'}"

    def normalize_attributes(self, attributes: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        """
        Reclasse toutes les paires d'un dict d'attributs d'annonce.
        En cas de collision de clé après reclassement, la première paire gagne.
        """
        clean: Dict[str, str] = {}
        if not attributes:
            return clean

        for raw_key, raw_value in attributes.items():
            if raw_value is None:
                logger.debug("normalize_attributes: valeur nulle ignorée (%s)", raw_key)
                continue
            key, value = self.classify(raw_key, raw_value)
            if key in clean:
                logger.debug(
                    "normalize_attributes: collision sur '%s' (%r ignoré, %r conservé)",
                    key,
                    value,
                    clean[key],
                )
                continue
            clean[key] = value
        return clean


_DEFAULT_CLASSIFIER = AttributeClassifier()


def classify_attribute(key: Optional[str], value: Optional[Any]) -> Tuple[str, str]:
    return _DEFAULT_CLASSIFIER.classify(key, value)


def normalize_attributes(attributes: Optional[Mapping[str, Any]]) -> Dict[str, str]:
    return _DEFAULT_CLASSIFIER.normalize_attributes(attributes)
