# domain/normalizers/__init__.py

"""
Package de normalisation des valeurs libres des annonces.

Contient les tables de correspondance multilingues et les normalizers
d'état, de couleur et d'attributs (stockage, RAM, batterie, écran, taille).
"""

from domain.normalizers.tables import (
    COLOR_TABLE,
    CONDITION_TABLE,
    CONDITION_KEYWORDS,
    CONDITION_BUCKETS,
    CONDITION_NEW,
    CONDITION_USED,
    CONDITION_BROKEN,
    CONDITION_UNKNOWN,
    NormalizationTable,
)
from domain.normalizers.condition import ConditionNormalizer, normalize_condition
from domain.normalizers.color import (
    ColorNormalizer,
    normalize_color,
    is_known_color,
    get_unnormalized_colors,
)
from domain.normalizers.attributes import (
    AttributeClassifier,
    classify_attribute,
    normalize_attributes,
)

__all__ = [
    # Tables
    "COLOR_TABLE",
    "CONDITION_TABLE",
    "CONDITION_KEYWORDS",
    "CONDITION_BUCKETS",
    "CONDITION_NEW",
    "CONDITION_USED",
    "CONDITION_BROKEN",
    "CONDITION_UNKNOWN",
    "NormalizationTable",
    # Etat
    "ConditionNormalizer",
    "normalize_condition",
    # Couleur
    "ColorNormalizer",
    "normalize_color",
    "is_known_color",
    "get_unnormalized_colors",
    # Attributs
    "AttributeClassifier",
    "classify_attribute",
    "normalize_attributes",
]
