"""
Flag expressions evaluated now or deferred to build time.

Single-config generators know the build configuration while configuring
and can evaluate expressions eagerly. Multi-config generators pick the
configuration per build, so config-dependent flags are rendered as
CMake generator expressions instead.

Example:
    ```python
    items = [
        Literal("-Wl,/NODEFAULTLIB:msvcrt"),
        ConfigConditional("Debug", "-Wl,/DEFAULTLIB:libcmtd"),
    ]
    expand(items, "Release")  # ['-Wl,/NODEFAULTLIB:msvcrt']
    expand(items)  # [..., '$<$<CONFIG:Debug>:-Wl,/DEFAULTLIB:libcmtd>']
    ```
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Union


@dataclass(frozen=True)
class Literal:
    """A flag present in every configuration."""

    flag: str

    def evaluate(self, config: Optional[str]) -> Optional[str]:
        return self.flag

    def render(self) -> str:
        return self.flag


@dataclass(frozen=True)
class ConfigConditional:
    """
    A flag present only for one build configuration.

    Attributes:
        config: Configuration name, compared case-insensitively
        flag: The flag text
        negate: If True, present for every configuration except config
    """

    config: str
    flag: str
    negate: bool = False

    def matches(self, config: Optional[str]) -> bool:
        """Check whether the flag applies to the given configuration."""
        same = (config or "").lower() == self.config.lower()
        return not same if self.negate else same

    def evaluate(self, config: Optional[str]) -> Optional[str]:
        return self.flag if self.matches(config) else None

    def render(self) -> str:
        condition = f"$<CONFIG:{self.config}>"
        if self.negate:
            condition = f"$<NOT:{condition}>"
        return f"$<{condition}:{self.flag}>"


FlagExpr = Union[Literal, ConfigConditional]


def expand(exprs: Iterable[FlagExpr], config: Optional[str] = None) -> List[str]:
    """
    Turn flag expressions into strings.

    Args:
        exprs: Flag expressions in order
        config: Build configuration; None renders deferred expressions

    Returns:
        Flags in their original order
    """
    if config is None:
        return [expr.render() for expr in exprs]

    flags = []
    for expr in exprs:
        value = expr.evaluate(config)
        if value is not None:
            flags.append(value)
    return flags


def concat(exprs: Iterable[FlagExpr], config: Optional[str] = None) -> str:
    """
    Join expressions into one value, e.g. a property value.

    Args:
        exprs: Value fragments in order
        config: Build configuration; None renders deferred expressions

    Returns:
        Concatenated value
    """
    return "".join(expand(exprs, config))


def literals(*flags: str) -> List[Literal]:
    """Wrap plain flags as Literal expressions."""
    return [Literal(flag) for flag in flags]
