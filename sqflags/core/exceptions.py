"""
Centralized exception hierarchy for sqflags.

Detection ambiguity, libc probe failures and missing build-tool features
are not errors: they degrade to empty or fallback flags. The exceptions
below cover caller mistakes and broken package data only.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class SqFlagsError(Exception):
    """Base exception for all sqflags errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(SqFlagsError):
    """Configuration file parsing or validation error."""

    pass


# ============================================================================
# Flag Table Exceptions
# ============================================================================


class FlagTableError(SqFlagsError):
    """Base exception for flag table errors."""

    pass


class WarningTableError(FlagTableError):
    """Raised when the packaged warning table is missing or malformed."""

    pass


# ============================================================================
# Bundle Exceptions
# ============================================================================


class BundleError(SqFlagsError):
    """Base exception for bundle-related errors."""

    pass


class UnknownModuleError(BundleError):
    """Raised when a bundle is requested for an unregistered flag module."""

    def __init__(self, module_name: str):
        self.module_name = module_name
        super().__init__(f"Unknown flag module: {module_name}")
