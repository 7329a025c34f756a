from .core.env import ENV, Env, IS_DEV, IS_LOCAL, IS_PROD, IS_TEST, get_env
from .core.logging import setup_logging
from .settings import AppSettings, get_app_settings

CURRENT_ENVIRONMENT = ENV

__all__ = [
    "Env",
    "ENV",
    "CURRENT_ENVIRONMENT",
    "IS_LOCAL",
    "IS_DEV",
    "IS_TEST",
    "IS_PROD",
    "get_env",
    "setup_logging",
    "AppSettings",
    "get_app_settings",
]
