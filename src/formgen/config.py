"""
Configuration module for formgen.

Handles environment variables and default settings.
"""

import json
import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


# Fallback options for a Combobox declared without options
DEFAULT_COMBOBOX_OPTIONS: list[dict[str, str]] = [
    {"label": "English", "value": "en"},
    {"label": "French", "value": "fr"},
    {"label": "German", "value": "de"},
    {"label": "Spanish", "value": "es"},
    {"label": "Portuguese", "value": "pt"},
    {"label": "Russian", "value": "ru"},
    {"label": "Japanese", "value": "ja"},
    {"label": "Korean", "value": "ko"},
    {"label": "Chinese", "value": "zh"},
]


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(name, str(default).lower()).lower() == "true"


def _env_options(name: str, default: list[dict[str, str]]) -> list[dict[str, str]]:
    raw = os.getenv(name)
    if not raw:
        return [dict(option) for option in default]
    try:
        options = json.loads(raw)
    except json.JSONDecodeError:
        logger.warning(f"Ignoring {name}: not valid JSON")
        return [dict(option) for option in default]
    if not isinstance(options, list):
        logger.warning(f"Ignoring {name}: expected a JSON list")
        return [dict(option) for option in default]
    return [
        {"label": item, "value": item} if isinstance(item, str) else dict(item)
        for item in options
    ]


@dataclass
class FormGenConfig:
    """Configuration settings for formgen."""

    # Code emission
    component_name: str = "MyForm"
    indent_width: int = 2

    # Variant catalogs and limits
    combobox_options: list[dict[str, str]] = field(
        default_factory=lambda: [dict(option) for option in DEFAULT_COMBOBOX_OPTIONS]
    )
    file_max_count: int = 5
    file_max_size: int = 4 * 1024 * 1024
    otp_default_length: int = 6
    default_phone_country: str = "TR"
    slider_min: float = 0
    slider_max: float = 100
    slider_step: float = 1
    earliest_date: str = "1900-01-01"

    # MCP Server settings
    mcp_transport: str = "stdio"  # stdio or sse
    mcp_port: int = 8080

    # Guardrail settings
    enable_guardrails: bool = True
    enable_injection_check: bool = True
    enable_field_name_validation: bool = True

    # Output settings
    indent_json_output: int = 2
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "FormGenConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            component_name=os.getenv("FORMGEN_COMPONENT_NAME", _defaults.component_name),
            indent_width=int(os.getenv("FORMGEN_INDENT_WIDTH", str(_defaults.indent_width))),
            combobox_options=_env_options("FORMGEN_COMBOBOX_OPTIONS", _defaults.combobox_options),
            file_max_count=int(os.getenv("FORMGEN_FILE_MAX_COUNT", str(_defaults.file_max_count))),
            file_max_size=int(os.getenv("FORMGEN_FILE_MAX_SIZE", str(_defaults.file_max_size))),
            otp_default_length=int(os.getenv("FORMGEN_OTP_LENGTH", str(_defaults.otp_default_length))),
            default_phone_country=os.getenv("FORMGEN_PHONE_COUNTRY", _defaults.default_phone_country),
            slider_min=float(os.getenv("FORMGEN_SLIDER_MIN", str(_defaults.slider_min))),
            slider_max=float(os.getenv("FORMGEN_SLIDER_MAX", str(_defaults.slider_max))),
            slider_step=float(os.getenv("FORMGEN_SLIDER_STEP", str(_defaults.slider_step))),
            earliest_date=os.getenv("FORMGEN_EARLIEST_DATE", _defaults.earliest_date),
            mcp_transport=os.getenv("MCP_TRANSPORT", _defaults.mcp_transport),
            mcp_port=int(os.getenv("MCP_PORT", str(_defaults.mcp_port))),
            enable_guardrails=_env_flag("FORMGEN_ENABLE_GUARDRAILS", _defaults.enable_guardrails),
            enable_injection_check=_env_flag("FORMGEN_ENABLE_INJECTION_CHECK", _defaults.enable_injection_check),
            enable_field_name_validation=_env_flag(
                "FORMGEN_ENABLE_FIELD_NAME_VALIDATION", _defaults.enable_field_name_validation
            ),
            log_level=os.getenv("FORMGEN_LOG_LEVEL", _defaults.log_level),
        )


config = FormGenConfig.from_env()


def get_config() -> FormGenConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> FormGenConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
