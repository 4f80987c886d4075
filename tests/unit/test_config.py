"""
Tests for configuration loading and validation
"""

import pytest

from errchain import ErrChainError, ErrorFactory, MAXLEN, codes
from errchain.config import ErrChainConfig, ensure_valid, load_config, validate_config


def write_yaml(path, text):
    path.write_text(text, encoding="utf-8")
    return path


class TestErrChainConfig:
    def test_defaults(self):
        config = ErrChainConfig.default()
        assert config.maxlen == MAXLEN
        assert config.log_fallbacks is True

    def test_missing_file_gives_defaults(self, tmp_path):
        config = ErrChainConfig.from_yaml(tmp_path / "absent.yml")
        assert config == ErrChainConfig.default()

    def test_yaml_overrides(self, tmp_path):
        path = write_yaml(tmp_path / "config.yml", "errchain:\n  maxlen: 64\n  log_fallbacks: false\n")

        config = ErrChainConfig.from_yaml(path)

        assert config.maxlen == 64
        assert config.log_fallbacks is False

    def test_unknown_keys_ignored(self, tmp_path):
        path = write_yaml(tmp_path / "config.yml", "errchain:\n  colour: blue\n")
        assert ErrChainConfig.from_yaml(path) == ErrChainConfig.default()

    def test_other_sections_ignored(self, tmp_path):
        path = write_yaml(tmp_path / "config.yml", "logging:\n  level: debug\n")
        assert ErrChainConfig.from_yaml(path) == ErrChainConfig.default()

    def test_malformed_yaml_gives_defaults(self, tmp_path):
        path = write_yaml(tmp_path / "config.yml", "errchain: [unclosed\n")
        assert ErrChainConfig.from_yaml(path) == ErrChainConfig.default()

    def test_env_var_path(self, tmp_path, monkeypatch):
        path = write_yaml(tmp_path / "env.yml", "errchain:\n  maxlen: 128\n")
        monkeypatch.setenv("ERRCHAIN_CONFIG", str(path))

        assert ErrChainConfig.from_yaml().maxlen == 128

    def test_to_dict(self):
        assert ErrChainConfig().to_dict() == {
            "errchain": {"maxlen": MAXLEN, "log_fallbacks": True},
        }


class TestValidateConfig:
    def test_defaults_are_clean(self):
        assert validate_config(ErrChainConfig()) == []

    def test_tiny_maxlen_is_error(self):
        issues = validate_config(ErrChainConfig(maxlen=1))

        assert [i.level for i in issues] == ["error"]
        assert issues[0].path == "errchain.maxlen"

    def test_non_default_maxlen_warns(self):
        issues = validate_config(ErrChainConfig(maxlen=256))
        assert [i.level for i in issues] == ["warn"]

    def test_wrong_types(self):
        issues = validate_config(ErrChainConfig(maxlen="big", log_fallbacks="yes"))
        assert [i.level for i in issues] == ["error", "error"]


class TestLoadConfig:
    def test_invalid_raises(self, tmp_path):
        path = write_yaml(tmp_path / "config.yml", "errchain:\n  maxlen: 0\n")

        with pytest.raises(ErrChainError) as exc_info:
            load_config(path)

        assert exc_info.value.error_code == codes.CONFIG_INVALID

    def test_factory_from_config(self, tmp_path):
        path = write_yaml(tmp_path / "config.yml", "errchain:\n  maxlen: 4\n")
        factory = ErrorFactory.from_config(load_config(path))

        assert factory.maxlen == 4
        assert factory.new_from_copy("abcdef").message == "abc"

    def test_factory_from_unvalidated_config(self, tmp_path):
        path = write_yaml(tmp_path / "config.yml", "errchain:\n  maxlen: big\n")

        with pytest.raises(ErrChainError) as exc_info:
            ErrorFactory.from_config(ErrChainConfig.from_yaml(path))

        assert exc_info.value.error_code == codes.CONFIG_INVALID
        assert exc_info.value.details == {"issues": ["errchain.maxlen"]}

    def test_ensure_valid_returns_warnings(self, caplog):
        with caplog.at_level("WARNING", logger="errchain.config.validator"):
            issues = ensure_valid(ErrChainConfig(maxlen=64))

        assert [issue.level for issue in issues] == ["warn"]
        assert "maxlen" in caplog.text
