"""
Resolved flag sets and the modules that produce them.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .expressions import FlagExpr, Literal, concat, expand

LANGUAGES = ("C", "CXX")


@dataclass(frozen=True)
class FlagModule:
    """
    Description of one flag module and the names it exports.

    Attributes:
        name: INTERFACE target name (e.g., 'SQ_CW')
        c_variable: List variable holding C compile flags
        cxx_variable: List variable holding C++ compile flags
        link_variable: List variable holding link items, None if the
            module has no link items
    """

    name: str
    c_variable: str
    cxx_variable: str
    link_variable: Optional[str] = None


@dataclass(frozen=True)
class FlagSet:
    """
    Immutable result of resolving one module for one toolchain.

    Link item order is significant: library exclusions precede
    inclusions and archive-mode markers bracket the library they wrap.

    Attributes:
        compile_flags_c: C compile flags
        compile_flags_cxx: C++ compile flags
        link_items: Link flags and library references
        properties: (name, value fragments) build-tool properties
    """

    compile_flags_c: Tuple[FlagExpr, ...] = ()
    compile_flags_cxx: Tuple[FlagExpr, ...] = ()
    link_items: Tuple[FlagExpr, ...] = ()
    properties: Tuple[Tuple[str, Tuple[FlagExpr, ...]], ...] = ()

    @classmethod
    def build(
        cls,
        c: Iterable[FlagExpr] = (),
        cxx: Iterable[FlagExpr] = (),
        link: Iterable[FlagExpr] = (),
        properties: Optional[Mapping[str, Sequence[FlagExpr]]] = None,
    ) -> "FlagSet":
        """Create a FlagSet from lists."""
        props = tuple(
            (name, tuple(value)) for name, value in (properties or {}).items()
        )
        return cls(tuple(c), tuple(cxx), tuple(link), props)

    def is_empty(self) -> bool:
        return not (
            self.compile_flags_c
            or self.compile_flags_cxx
            or self.link_items
            or self.properties
        )

    def compile_exprs(self, language: str) -> Tuple[FlagExpr, ...]:
        """
        Get compile flag expressions for a language.

        Args:
            language: 'C' or 'CXX'

        Raises:
            ValueError: If language is not supported
        """
        if language == "C":
            return self.compile_flags_c
        if language == "CXX":
            return self.compile_flags_cxx
        raise ValueError(
            f"Unsupported language: {language}. Must be one of {LANGUAGES}"
        )

    def compile_flags(
        self, language: str, config: Optional[str] = None
    ) -> List[str]:
        """Compile flags for a language, evaluated or deferred."""
        return expand(self.compile_exprs(language), config)

    def link_flags(self, config: Optional[str] = None) -> List[str]:
        """Link items, evaluated or deferred."""
        return expand(self.link_items, config)

    def property_values(self, config: Optional[str] = None) -> Dict[str, str]:
        """Property values, evaluated or deferred."""
        return {name: concat(value, config) for name, value in self.properties}

    def evaluated(self, config: str) -> "FlagSet":
        """
        Evaluate every expression for a known build configuration.

        Args:
            config: Build configuration (e.g., 'Debug')

        Returns:
            FlagSet containing only Literal expressions
        """

        def _lits(exprs):
            return tuple(Literal(flag) for flag in expand(exprs, config))

        return FlagSet(
            compile_flags_c=_lits(self.compile_flags_c),
            compile_flags_cxx=_lits(self.compile_flags_cxx),
            link_items=_lits(self.link_items),
            properties=tuple(
                (name, (Literal(concat(value, config)),))
                for name, value in self.properties
            ),
        )
