"""
Flag resolver interface.

A resolver maps a ToolchainProfile and Options to a FlagSet. Resolution
is pure and total: unsupported toolchains get an empty FlagSet, never an
exception.
"""

from abc import ABC, abstractmethod

from ..toolchain.profile import ToolchainProfile
from .flagset import FlagModule, FlagSet
from .options import Options


class FlagResolver(ABC):
    """
    Abstract base class for flag modules.

    Subclasses set `module` and implement resolve().
    """

    module: FlagModule

    @abstractmethod
    def resolve(self, profile: ToolchainProfile, options: Options) -> FlagSet:
        """
        Resolve flags for a toolchain.

        Args:
            profile: Detected toolchain profile
            options: Resolution options

        Returns:
            FlagSet, empty when the toolchain is not supported
        """
        pass
