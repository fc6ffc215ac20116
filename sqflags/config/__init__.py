"""
Configuration file support for sqflags.
"""

from .parser import SqFlagsConfig, parse_config, parse_config_data

__all__ = ["SqFlagsConfig", "parse_config", "parse_config_data"]
