# config/settings.py

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

logger = logging.getLogger(__name__)

DUPLICATE_SLUG_POLICIES = ("keep_last", "reject")
DEFAULT_MAX_DEPTH = 32
# Plafond absolu de max_depth, sous la limite de récursion (validation JSON Schema incluse).
MAX_SUPPORTED_DEPTH = 40


def _load_dotenv_if_present(env_file: str | Path = ".env") -> None:
    """
    Charge un fichier `.env` local si présent et injecte les variables
    manquantes dans l'environnement process.

    - ignore les lignes vides ou commentées
    - ne surcharge jamais une variable déjà définie dans l'environnement
    """
    env_path = Path(env_file)
    logger.debug("Recherche d'un fichier .env local à charger: %s", env_path)

    if not env_path.exists():
        logger.debug("Aucun fichier .env trouvé à %s, passage en mode variables système.", env_path)
        return

    try:
        for line_no, raw_line in enumerate(env_path.read_text(encoding="utf-8").splitlines(), start=1):
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip()

            if not key:
                logger.warning("Ligne %d du .env ignorée (clé vide).", line_no)
                continue

            if os.getenv(key) is None:
                os.environ[key] = value
                logger.debug("Variable %s chargée depuis .env.", key)
            else:
                logger.debug("Variable %s déjà définie dans l'environnement, .env laissé intact.", key)

        logger.info("Chargement du fichier .env terminé.")
    except OSError as exc:
        logger.exception("Echec du chargement du fichier .env: %s", exc)
        raise RuntimeError(f"Erreur lors du chargement du fichier .env: {exc}") from exc


@dataclass(frozen=True)
class Settings:
    """
    Configuration du moteur de normalisation.

    - duplicate_slugs : politique en cas de slug dupliqué dans le document
                        de catégories ("keep_last" ou "reject")
    - max_depth       : profondeur maximale acceptée pour l'arbre
    - log_level       : niveau de logging (nom, ex: "INFO")
    """
    duplicate_slugs: str = "keep_last"
    max_depth: int = DEFAULT_MAX_DEPTH
    log_level: str = "INFO"

    def catalog_options(self) -> Dict[str, Any]:
        """Arguments nommés attendus par CategoryCatalog.load."""
        return {
            "reject_duplicate_slugs": self.duplicate_slugs == "reject",
            "max_depth": self.max_depth,
        }


def load_settings(env_file: str | Path = ".env") -> Settings:
    """
    Charge la configuration à partir des variables d'environnement.

    Variables prises en compte :
    - CATEGORY_DUPLICATE_SLUGS (optionnelle, "keep_last" par défaut)
    - CATEGORY_MAX_DEPTH       (optionnelle, 32 par défaut, 40 au plus)
    - LOG_LEVEL                (optionnelle, "INFO" par défaut)

    Lève RuntimeError si une valeur est invalide.
    """
    logger.debug("Chargement des Settings depuis les variables d'environnement.")
    _load_dotenv_if_present(env_file)

    policy = (os.getenv("CATEGORY_DUPLICATE_SLUGS") or "keep_last").strip().lower()
    if policy not in DUPLICATE_SLUG_POLICIES:
        logger.error("CATEGORY_DUPLICATE_SLUGS invalide: %r", policy)
        raise RuntimeError(
            f"CATEGORY_DUPLICATE_SLUGS doit valoir l'une de {DUPLICATE_SLUG_POLICIES}, reçu {policy!r}."
        )

    depth_env = os.getenv("CATEGORY_MAX_DEPTH")
    max_depth = DEFAULT_MAX_DEPTH
    if depth_env is not None and depth_env.strip():
        try:
            max_depth = int(depth_env.strip())
        except ValueError as exc:
            logger.error("CATEGORY_MAX_DEPTH n'est pas un entier: %r", depth_env)
            raise RuntimeError(f"CATEGORY_MAX_DEPTH invalide: {depth_env!r}") from exc
        if not 0 < max_depth <= MAX_SUPPORTED_DEPTH:
            logger.error("CATEGORY_MAX_DEPTH hors limites: %d", max_depth)
            raise RuntimeError(
                f"CATEGORY_MAX_DEPTH doit être entre 1 et {MAX_SUPPORTED_DEPTH}, reçu {max_depth}."
            )

    log_level = (os.getenv("LOG_LEVEL") or "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        logger.warning("LOG_LEVEL inconnu (%r), utilisation de INFO.", log_level)
        log_level = "INFO"

    settings = Settings(duplicate_slugs=policy, max_depth=max_depth, log_level=log_level)
    logger.info(
        "Settings chargés (duplicate_slugs=%s, max_depth=%d, log_level=%s).",
        settings.duplicate_slugs,
        settings.max_depth,
        settings.log_level,
    )
    return settings
