# config/log_config.py

from __future__ import annotations

import copy
import logging
import logging.config
from typing import Any, Dict, Mapping, Optional, Union

# -----------------------------
# Niveau custom "SUCCESS"
# -----------------------------
SUCCESS_LEVEL = 25  # entre INFO (20) et WARNING (30)
logging.addLevelName(SUCCESS_LEVEL, "SUCCESS")


def success(self: logging.Logger, msg: str, *args: Any, **kwargs: Any) -> None:
    if self.isEnabledFor(SUCCESS_LEVEL):
        self._log(SUCCESS_LEVEL, msg, args, **kwargs)


if not hasattr(logging.Logger, "success"):
    setattr(logging.Logger, "success", success)


LOGGING_CONFIG: Dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s",
            "datefmt": "%Y-%m-%d %H:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
            "level": "DEBUG",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "INFO",
    },
}


# Loggers du moteur dont le niveau peut être surchargé (remis à NOTSET sinon).
ENGINE_LOGGERS = ("config", "domain", "domain.normalizers")


def _level_name(level: Union[int, str]) -> str:
    if isinstance(level, int):
        return logging.getLevelName(level)
    name = level.strip().upper()
    return name if isinstance(logging.getLevelName(name), int) else "INFO"


def setup_logging(
    level: Union[int, str] = logging.INFO,
    overrides: Optional[Mapping[str, Union[int, str]]] = None,
) -> str:
    """
    Initialise la configuration de logging du moteur de normalisation.

    `overrides` fixe un niveau propre à certains loggers du moteur
    (ex: {"domain.normalizers": "INFO"} pour couper le détail par valeur).
    Retourne le nom du niveau racine appliqué.
    """
    root_level = _level_name(level)
    loggers: Dict[str, Any] = {name: {"level": "NOTSET"} for name in ENGINE_LOGGERS}
    for name, logger_level in (overrides or {}).items():
        if name not in ENGINE_LOGGERS:
            raise ValueError(f"Logger inconnu du moteur: {name!r}")
        loggers[name] = {"level": _level_name(logger_level)}

    try:
        config = copy.deepcopy(LOGGING_CONFIG)
        config["root"]["level"] = root_level
        config["loggers"] = loggers
        logging.config.dictConfig(config)

        logger = logging.getLogger(__name__)
        logger.debug("Logging initialisé (niveau=%s, surcharges=%s).", root_level, dict(overrides or {}))
        logger.success("Niveau SUCCESS activé (niveau=%s).", SUCCESS_LEVEL)

    except Exception:
        # Filet de sécurité : ne jamais casser l'ingestion à cause du logging
        logging.basicConfig(level=root_level)
        logging.getLogger(__name__).exception("Échec setup_logging, fallback basicConfig.")

    return root_level
