"""Core domain types and logic."""

from .config import PodrelConfig, ConfigError, load_config, load_config_if_present
from .errors import ErrorCode
from .result import Err, Ok, Result

__all__ = [
    # config
    "PodrelConfig",
    "ConfigError",
    "load_config",
    "load_config_if_present",
    # errors
    "ErrorCode",
    # result
    "Err",
    "Ok",
    "Result",
]
