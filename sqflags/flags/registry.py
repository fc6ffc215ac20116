"""
Registry of available flag modules.
"""

from typing import Dict, List, Type

from ..core.exceptions import UnknownModuleError
from .resolver import FlagResolver
from .runtimes import StaticRuntimeResolver
from .warnings import WarningFlagsResolver

_RESOLVERS: Dict[str, Type[FlagResolver]] = {
    WarningFlagsResolver.module.name: WarningFlagsResolver,
    StaticRuntimeResolver.module.name: StaticRuntimeResolver,
}


def available_modules() -> List[str]:
    """List flag module names ('SQ_CW', 'SQ_SRT')."""
    return list(_RESOLVERS)


def get_resolver(module_name: str) -> FlagResolver:
    """
    Create the resolver for a flag module.

    Args:
        module_name: Module name, e.g. 'SQ_SRT'

    Raises:
        UnknownModuleError: If no such module exists
    """
    try:
        resolver_class = _RESOLVERS[module_name]
    except KeyError:
        raise UnknownModuleError(module_name) from None
    return resolver_class()
