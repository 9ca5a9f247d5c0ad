# domain/engine.py

"""
Assemblage du moteur au démarrage du process.

- Charge la configuration (Settings) et applique le niveau de logging
- Construit le catalogue partagé et le charge immédiatement : un document
  de catégories invalide est une erreur fatale de démarrage
- Instancie les normalizers (tables injectées, lecture seule)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from config.log_config import setup_logging
from config.settings import Settings, load_settings
from domain.category_catalog import CategoryCatalog, CategoryDocumentError, SharedCatalog
from domain.json_utils import JsonDocument
from domain.normalizers import AttributeClassifier, ColorNormalizer, ConditionNormalizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingEngine:
    """Dépendances en lecture seule utilisées par le code d'ingestion."""

    settings: Settings
    shared_catalog: SharedCatalog
    conditions: ConditionNormalizer
    colors: ColorNormalizer
    attributes: AttributeClassifier

    @property
    def catalog(self) -> CategoryCatalog:
        return self.shared_catalog.get()


def bootstrap_engine(
    document_provider: Callable[[], JsonDocument],
    *,
    settings: Optional[Settings] = None,
    env_file: str | Path = ".env",
) -> ListingEngine:
    """
    Point d'entrée d'initialisation du moteur.

    Lève RuntimeError (configuration) ou CategoryDocumentError (document de
    catégories) : dans les deux cas le process ne peut pas servir de requête.
    """
    if settings is None:
        settings = load_settings(env_file)
    applied = setup_logging(settings.log_level)
    logger.info("Initialisation du moteur de normalisation (log_level=%s).", applied)

    shared = SharedCatalog.from_settings(settings, document_provider)
    try:
        shared.get()
    except CategoryDocumentError as exc:
        logger.critical("Catalogue de catégories inutilisable, arrêt: %s", exc)
        raise

    colors = ColorNormalizer()
    return ListingEngine(
        settings=settings,
        shared_catalog=shared,
        conditions=ConditionNormalizer(),
        colors=colors,
        attributes=AttributeClassifier(colors),
    )
