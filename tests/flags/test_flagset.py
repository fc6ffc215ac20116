"""
Tests for sqflags.flags.flagset module.
"""

import pytest

from sqflags.flags.expressions import ConfigConditional, Literal, literals
from sqflags.flags.flagset import FlagModule, FlagSet


@pytest.fixture
def mixed_flags():
    return FlagSet.build(
        c=literals("-Wall"),
        cxx=[Literal("-Wall"), ConfigConditional("Debug", "-D_GLIBCXX_DEBUG")],
        link=[
            Literal("-Wl,/NODEFAULTLIB:msvcrt"),
            ConfigConditional("Debug", "-Wl,/DEFAULTLIB:libcmtd"),
            ConfigConditional("Debug", "-Wl,/DEFAULTLIB:libcmt", negate=True),
        ],
        properties={
            "CMAKE_MSVC_RUNTIME_LIBRARY": [
                Literal("MultiThreaded"),
                ConfigConditional("Debug", "Debug"),
            ]
        },
    )


@pytest.mark.unit
class TestFlagSet:
    """Tests for FlagSet."""

    def test_default_is_empty(self):
        assert FlagSet().is_empty()
        assert FlagSet.build().is_empty()

    def test_property_only_is_not_empty(self):
        flags = FlagSet.build(properties={"X": literals("1")})

        assert not flags.is_empty()

    def test_build_stores_tuples(self, mixed_flags):
        assert isinstance(mixed_flags.compile_flags_c, tuple)
        assert isinstance(mixed_flags.link_items, tuple)
        assert mixed_flags.properties[0][0] == "CMAKE_MSVC_RUNTIME_LIBRARY"

    def test_equal_when_built_alike(self):
        a = FlagSet.build(link=literals("-static"))
        b = FlagSet.build(link=literals("-static"))

        assert a == b
        assert hash(a) == hash(b)

    def test_compile_flags_per_language(self, mixed_flags):
        assert mixed_flags.compile_flags("C") == ["-Wall"]
        assert mixed_flags.compile_flags("CXX", "Debug") == [
            "-Wall",
            "-D_GLIBCXX_DEBUG",
        ]
        assert mixed_flags.compile_flags("CXX", "Release") == ["-Wall"]

    def test_unsupported_language(self, mixed_flags):
        with pytest.raises(ValueError, match="Unsupported language"):
            mixed_flags.compile_flags("Fortran")

    def test_link_flags_keep_order(self, mixed_flags):
        assert mixed_flags.link_flags("Debug") == [
            "-Wl,/NODEFAULTLIB:msvcrt",
            "-Wl,/DEFAULTLIB:libcmtd",
        ]
        assert mixed_flags.link_flags("Release") == [
            "-Wl,/NODEFAULTLIB:msvcrt",
            "-Wl,/DEFAULTLIB:libcmt",
        ]

    def test_link_flags_deferred(self, mixed_flags):
        assert mixed_flags.link_flags() == [
            "-Wl,/NODEFAULTLIB:msvcrt",
            "$<$<CONFIG:Debug>:-Wl,/DEFAULTLIB:libcmtd>",
            "$<$<NOT:$<CONFIG:Debug>>:-Wl,/DEFAULTLIB:libcmt>",
        ]

    def test_property_values(self, mixed_flags):
        assert mixed_flags.property_values("debug") == {
            "CMAKE_MSVC_RUNTIME_LIBRARY": "MultiThreadedDebug"
        }
        assert mixed_flags.property_values() == {
            "CMAKE_MSVC_RUNTIME_LIBRARY": "MultiThreaded$<$<CONFIG:Debug>:Debug>"
        }

    def test_evaluated_contains_only_literals(self, mixed_flags):
        release = mixed_flags.evaluated("Release")

        assert all(isinstance(e, Literal) for e in release.link_items)
        assert release.link_flags() == mixed_flags.link_flags("Release")
        assert release.property_values() == {
            "CMAKE_MSVC_RUNTIME_LIBRARY": "MultiThreaded"
        }

    def test_immutable(self, mixed_flags):
        with pytest.raises(AttributeError):
            mixed_flags.link_items = ()


@pytest.mark.unit
class TestFlagModule:
    """Tests for FlagModule."""

    def test_link_variable_optional(self):
        module = FlagModule("SQ_CW", "SQ_CW_C", "SQ_CW_CXX")

        assert module.link_variable is None
