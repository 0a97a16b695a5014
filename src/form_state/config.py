"""
Configuration module for form_state.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass
from typing import Literal, get_args

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

Theme = Literal["light", "dark", "system"]
THEMES: tuple[str, ...] = get_args(Theme)


@dataclass
class FormStateConfig:
    """Configuration settings for form_state."""

    # Appearance preference handed to the presentation layer
    theme: Theme = "system"

    # Message shown next to an invalid field on the registration form
    error_message: str = "Input Error"

    # Logging settings
    log_level: str = "INFO"

    # Demo page settings
    demo_host: str = "127.0.0.1"
    demo_port: int = 7860

    @classmethod
    def from_env(cls) -> "FormStateConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        theme = os.getenv("FORM_STATE_THEME", _defaults.theme).lower()
        if theme not in THEMES:
            theme = _defaults.theme

        return cls(
            theme=theme,
            error_message=os.getenv("FORM_STATE_ERROR_MESSAGE", _defaults.error_message),
            log_level=os.getenv("FORM_STATE_LOG_LEVEL", _defaults.log_level).upper(),
            demo_host=os.getenv("FORM_STATE_DEMO_HOST", _defaults.demo_host),
            demo_port=int(os.getenv("FORM_STATE_DEMO_PORT", str(_defaults.demo_port))),
        )


config = FormStateConfig.from_env()


def get_config() -> FormStateConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> FormStateConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config


def get_theme() -> Theme:
    """Get the configured theme preference."""
    return config.theme


def set_theme(theme: str) -> Theme:
    """
    Set the theme preference.

    Raises:
        ValueError: If ``theme`` is not one of light, dark or system.
    """
    if theme not in THEMES:
        raise ValueError(f"Unknown theme '{theme}', expected one of: {', '.join(THEMES)}")
    config.theme = theme
    return config.theme
