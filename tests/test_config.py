"""
Tests for environment-driven configuration.
"""

from dataclasses import dataclass, field

from fieldrules.config import Settings
from fieldrules.validation import Validator


@dataclass
class Login:
    user: str = field(default="", metadata={"check": "nonzero", "json": "user_name", "xml": "login"})


class TestSettings:

    def test_defaults(self, monkeypatch):
        for key in ("VALIDATE_TAG", "NAME_TAG", "READ_NAME_TAG", "LOG_LEVEL", "LOG_JSON"):
            monkeypatch.delenv(f"FIELDRULES_{key}", raising=False)

        settings = Settings(_env_file=None)

        assert settings.VALIDATE_TAG == "validate"
        assert settings.NAME_TAG == "json"
        assert settings.READ_NAME_TAG is False
        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_JSON is False

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("FIELDRULES_VALIDATE_TAG", "check")
        monkeypatch.setenv("FIELDRULES_READ_NAME_TAG", "true")

        settings = Settings(_env_file=None)

        assert settings.VALIDATE_TAG == "check"
        assert settings.READ_NAME_TAG is True


class TestValidatorFromSettings:

    def test_uses_configured_keys(self):
        settings = Settings(_env_file=None, VALIDATE_TAG="check", NAME_TAG="xml", READ_NAME_TAG=True)

        validator = Validator.from_settings(settings)
        report = validator.validate(Login())

        assert validator.tag == "check"
        assert validator.name_tag == "xml"
        assert validator.read_name_tag is True
        assert report.messages() == {"login": ["zero value"]}

    def test_registry_has_builtins(self):
        validator = Validator.from_settings(Settings(_env_file=None))

        assert validator.registry.names() == ["len", "max", "min", "nonzero", "regexp"]

    def test_validators_do_not_share_registries(self):
        first = Validator.from_settings(Settings(_env_file=None))
        second = Validator.from_settings(Settings(_env_file=None))

        first.remove_validation_func("len")

        assert "len" in second.registry
