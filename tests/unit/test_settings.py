import logging

import pytest

from aac.config.constants import VALIDATION_CODES
from aac.config.settings import DEFAULT_MODELS_DIR, Settings, get_settings
from aac.exceptions import ArchitectureValidationError, ModelLoadError, log_exception
from aac.model import ValidationError


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("AAC_MODELS_DIR", "AAC_LOG_LEVEL", "AAC_PORT", "AAC_LOAD_ON_STARTUP"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings()

        assert settings.models_dir == DEFAULT_MODELS_DIR
        assert settings.log_level == "INFO"
        assert settings.port == 8080
        assert settings.load_on_startup is True

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("AAC_MODELS_DIR", "/srv/models")
        monkeypatch.setenv("AAC_LOG_LEVEL", "debug")
        monkeypatch.setenv("AAC_PORT", "9000")
        monkeypatch.setenv("AAC_LOAD_ON_STARTUP", "no")

        settings = get_settings(dotenv=False)

        assert settings.models_dir == "/srv/models"
        assert settings.log_level == "DEBUG"
        assert settings.port == 9000
        assert settings.load_on_startup is False

    def test_invalid_port(self):
        with pytest.raises(ValueError):
            Settings(port=0)


class TestExceptions:

    def test_model_load_error_context(self):
        error = ModelLoadError("Cannot read", "models/a.pkl")
        assert "models/a.pkl" in str(error)
        assert error.timestamp

    def test_validation_error_lists_codes(self):
        error = ArchitectureValidationError("failed", [ValidationError("ARCH_001", "blank")])
        assert "ARCH_001" in str(error)

    def test_log_exception(self, caplog):
        logger = logging.getLogger("aac.test")

        log_exception(ModelLoadError("Cannot read", "a.pkl"), logger, {"stage": "load"})

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert record.error_type == "ModelLoadError"
        assert record.model_path == "a.pkl"
        assert record.stage == "load"


class TestValidationCodes:

    def test_every_code_described(self):
        codes = [value for name, value in vars(VALIDATION_CODES).items() if name.isupper()]
        assert sorted(codes) == sorted(VALIDATION_CODES.descriptions)

    def test_unknown_code_describes_itself(self):
        assert VALIDATION_CODES.describe("XYZ_999") == "XYZ_999"
