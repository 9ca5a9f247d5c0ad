import logging
from unittest import mock

import pytest

from config.log_config import SUCCESS_LEVEL, setup_logging
from config.settings import Settings, load_settings

ENV_KEYS = ("CATEGORY_DUPLICATE_SLUGS", "CATEGORY_MAX_DEPTH", "LOG_LEVEL")


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return tmp_path / ".env"


def test_defaults(clean_env):
    settings = load_settings(clean_env)

    assert settings == Settings()
    assert settings.catalog_options() == {"reject_duplicate_slugs": False, "max_depth": 32}


def test_environment_values(clean_env, monkeypatch):
    monkeypatch.setenv("CATEGORY_DUPLICATE_SLUGS", " Reject ")
    monkeypatch.setenv("CATEGORY_MAX_DEPTH", "8")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings(clean_env)

    assert settings.duplicate_slugs == "reject"
    assert settings.max_depth == 8
    assert settings.log_level == "DEBUG"
    assert settings.catalog_options()["reject_duplicate_slugs"] is True


def test_dotenv_never_overrides_environment(clean_env, monkeypatch):
    clean_env.write_text(
        "# commentaire\nCATEGORY_MAX_DEPTH=4\nLOG_LEVEL=WARNING\n=sans_cle\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("LOG_LEVEL", "ERROR")

    with mock.patch.dict("os.environ"):
        settings = load_settings(clean_env)

    assert settings.max_depth == 4
    assert settings.log_level == "ERROR"


@pytest.mark.parametrize(
    "key, value",
    [
        ("CATEGORY_DUPLICATE_SLUGS", "merge"),
        ("CATEGORY_MAX_DEPTH", "deep"),
        ("CATEGORY_MAX_DEPTH", "0"),
        ("CATEGORY_MAX_DEPTH", "41"),
    ],
)
def test_invalid_values_raise(clean_env, monkeypatch, key, value):
    monkeypatch.setenv(key, value)

    with pytest.raises(RuntimeError):
        load_settings(clean_env)


def test_unknown_log_level_falls_back_to_info(clean_env, monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "verbose")

    assert load_settings(clean_env).log_level == "INFO"


def test_setup_logging_registers_success_level():
    setup_logging("DEBUG")

    assert logging.getLevelName(SUCCESS_LEVEL) == "SUCCESS"
    assert logging.getLogger().level == logging.DEBUG
    assert hasattr(logging.getLogger("domain"), "success")

    setup_logging(logging.WARNING)
    assert logging.getLogger().level == logging.WARNING


def test_setup_logging_overrides_engine_loggers():
    applied = setup_logging("debug", overrides={"domain.normalizers": "INFO"})

    assert applied == "DEBUG"
    assert logging.getLogger("domain.normalizers").level == logging.INFO
    assert not logging.getLogger("domain.normalizers.condition").isEnabledFor(logging.DEBUG)
    assert logging.getLogger("domain.category_catalog").isEnabledFor(logging.DEBUG)

    # sans surcharge, le logger suit de nouveau la racine
    setup_logging("DEBUG")
    assert logging.getLogger("domain.normalizers").level == logging.NOTSET
    assert logging.getLogger("domain.normalizers.condition").isEnabledFor(logging.DEBUG)


def test_setup_logging_rejects_foreign_logger():
    with pytest.raises(ValueError):
        setup_logging("INFO", overrides={"requests": "DEBUG"})
