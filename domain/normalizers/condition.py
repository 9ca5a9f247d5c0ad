# domain/normalizers/condition.py

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from domain.normalizers.tables import (
    CONDITION_KEYWORDS,
    CONDITION_TABLE,
    CONDITION_UNKNOWN,
    NormalizationTable,
)

logger = logging.getLogger(__name__)

MIN_SUBSTRING_KEY_LENGTH = 3
MAX_LITERAL_LENGTH = 30


class ConditionNormalizer:
    """
    Normalise un état libre (multilingue) vers {new, used, broken, unknown}.

    Ordre d'évaluation :
      1) vide -> unknown
      2) correspondance exacte dans la table
      3) repli par sous-chaîne (clés >= 3 caractères, la plus longue d'abord)
      4) rejet des valeurs trop longues ou sans mot-clé d'état -> unknown
      5) sinon la valeur nettoyée est conservée telle quelle
    Ne lève jamais d'exception.

    Limite connue : le repli par sous-chaîne ignore la négation,
    "nicht neu" donne "new" (la clé "neu" est trouvée dans la phrase).
    """

    def __init__(
        self,
        table: NormalizationTable = CONDITION_TABLE,
        keywords: Sequence[str] = CONDITION_KEYWORDS,
    ) -> None:
        self._table = table
        self._keywords = tuple(keywords)

    def normalize(self, raw: Optional[Any]) -> str:
        if raw is None:
            return CONDITION_UNKNOWN
        cond = str(raw).strip().lower()
        if not cond:
            return CONDITION_UNKNOWN

        exact = self._table.get(cond)
        if exact is not None:
            return exact

        # ex: "1x vorhanden, gebraucht" contient "gebraucht"
        for key in self._table.keys_longest_first():
            if len(key) < MIN_SUBSTRING_KEY_LENGTH:
                break
            if key in cond:
                logger.debug("normalize_condition: %r reconnu par sous-chaîne %r", cond, key)
                return self._table.entries[key]

        if len(cond) > MAX_LITERAL_LENGTH or not self.is_likely_condition(cond):
            logger.debug("normalize_condition: valeur rejetée %r -> unknown", cond)
            return CONDITION_UNKNOWN

        return cond

    def is_likely_condition(self, value: str) -> bool:
        """Vrai si la valeur contient au moins un mot-clé d'état connu."""
        return any(keyword in value for keyword in self._keywords)


_DEFAULT_NORMALIZER = ConditionNormalizer()


def normalize_condition(raw: Optional[Any]) -> str:
    return _DEFAULT_NORMALIZER.normalize(raw)
