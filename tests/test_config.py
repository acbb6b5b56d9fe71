import pytest
from pydantic import ValidationError

from tqs.compiler.evaluator import METHODS
from tqs.config import TqsConfig, load_config, load_vars
from tqs.exceptions import ConfigError


class TestTqsConfig:
    def test_defaults(self):
        config = TqsConfig()
        assert config.quote is None
        assert config.methods == list(METHODS)
        assert config.vars == {}

    def test_unknown_method_rejected(self):
        with pytest.raises(ValidationError):
            TqsConfig(methods=["toUpperCase", "__class__"])

    def test_invalid_quote_rejected(self):
        with pytest.raises(ValidationError):
            TqsConfig(quote="`")

    def test_extra_keys_rejected(self):
        with pytest.raises(ValidationError):
            TqsConfig(delimiter="'''")

    def test_frozen(self):
        config = TqsConfig()
        with pytest.raises(ValidationError):
            config.quote = "'"


class TestLoadConfig:
    def test_load(self, tmp_path):
        path = tmp_path / "tqs.yaml"
        path.write_text(
            "quote: \"'\"\n"
            "methods: [toUpperCase, trim]\n"
            "vars:\n"
            "  title: Hello\n"
        )

        config = load_config(path)
        assert config.quote == "'"
        assert config.methods == ["toUpperCase", "trim"]
        assert config.vars == {"title": "Hello"}

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "tqs.yaml"
        path.write_text("")
        assert load_config(path) == TqsConfig()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "does-not-exist.yaml")

    def test_invalid_content(self, tmp_path):
        path = tmp_path / "tqs.yaml"
        path.write_text("methods: [shout]\n")
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config(path)

    def test_top_level_must_be_mapping(self, tmp_path):
        path = tmp_path / "tqs.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_broken_yaml(self, tmp_path):
        path = tmp_path / "tqs.yaml"
        path.write_text("vars: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(path)


def test_load_vars(tmp_path):
    path = tmp_path / "vars.yaml"
    path.write_text("title: Hello\nuser:\n  name: Ada\n")
    assert load_vars(path) == {"title": "Hello", "user": {"name": "Ada"}}
