"""Tests for formgen configuration."""

import logging

from formgen.config import DEFAULT_COMBOBOX_OPTIONS, FormGenConfig, get_config, update_config


class TestFromEnv:
    """Tests for environment-driven configuration."""

    def test_defaults(self, monkeypatch):
        for name in ("FORMGEN_COMPONENT_NAME", "FORMGEN_COMBOBOX_OPTIONS", "MCP_PORT"):
            monkeypatch.delenv(name, raising=False)
        config = FormGenConfig.from_env()
        assert config.component_name == "MyForm"
        assert config.combobox_options == DEFAULT_COMBOBOX_OPTIONS
        assert config.mcp_port == 8080
        assert not hasattr(config, "verbose_output")

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("FORMGEN_COMPONENT_NAME", "ContactForm")
        monkeypatch.setenv("FORMGEN_FILE_MAX_COUNT", "3")
        monkeypatch.setenv("FORMGEN_SLIDER_MAX", "10")
        monkeypatch.setenv("FORMGEN_ENABLE_GUARDRAILS", "false")
        monkeypatch.setenv("MCP_TRANSPORT", "sse")
        config = FormGenConfig.from_env()
        assert config.component_name == "ContactForm"
        assert config.file_max_count == 3
        assert config.slider_max == 10
        assert config.enable_guardrails is False
        assert config.mcp_transport == "sse"

    def test_combobox_options_from_json(self, monkeypatch):
        monkeypatch.setenv("FORMGEN_COMBOBOX_OPTIONS", '["Red", {"label": "Blue", "value": "blue"}]')
        config = FormGenConfig.from_env()
        assert config.combobox_options == [
            {"label": "Red", "value": "Red"},
            {"label": "Blue", "value": "blue"},
        ]

    def test_invalid_combobox_options(self, monkeypatch, caplog):
        monkeypatch.setenv("FORMGEN_COMBOBOX_OPTIONS", "not json")
        with caplog.at_level(logging.WARNING):
            config = FormGenConfig.from_env()
        assert config.combobox_options == DEFAULT_COMBOBOX_OPTIONS
        assert "FORMGEN_COMBOBOX_OPTIONS" in caplog.text


class TestUpdateConfig:
    """Tests for runtime updates."""

    def test_update_known_and_unknown_keys(self):
        original = get_config().component_name
        try:
            config = update_config(component_name="Checkout", no_such_setting=1)
            assert config.component_name == "Checkout"
            assert not hasattr(config, "no_such_setting")
        finally:
            update_config(component_name=original)
