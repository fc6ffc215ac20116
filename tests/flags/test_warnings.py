"""
Tests for sqflags.flags.warnings module.
"""

import pytest
import yaml

from sqflags.core.exceptions import WarningTableError
from sqflags.flags.options import Options
from sqflags.flags.warnings import (
    WarningFlagsResolver,
    load_warning_table,
    parse_warning_table,
)
from sqflags.toolchain.profile import (
    CompilerFamily,
    LibcKind,
    TargetOS,
    ToolchainProfile,
)

GNU_BASE = [
    "-Wall",
    "-Wextra",
    "-Wpedantic",
    "-Wshadow",
    "-Wconversion",
    "-Wsign-conversion",
    "-Wformat=2",
    "-Wunused",
    "-Wundef",
    "-Wnull-dereference",
    "-Wimplicit-fallthrough",
    "-Wdouble-promotion",
]
GNU_CXX_SHARED = [
    "-Woverloaded-virtual",
    "-Wold-style-cast",
    "-Wmissing-noreturn",
    "-Wzero-as-null-pointer-constant",
    "-Wctad-maybe-unsupported",
]
GCC_CXX_EXTRAS = [
    "-Wduplicated-cond",
    "-Wduplicated-branches",
    "-Wlogical-op",
    "-Wuseless-cast",
    "-Wmissing-declarations",
]


def _profile(family, compiler_id, target_os=TargetOS.LINUX, **kwargs):
    return ToolchainProfile(
        compiler_family=family, target_os=target_os, compiler_id=compiler_id, **kwargs
    )


def _is_msvc_flag(flag):
    return flag.startswith("/")


@pytest.fixture
def resolver():
    return WarningFlagsResolver()


@pytest.mark.unit
class TestWarningTable:
    """Tests for the packaged warning table."""

    def test_packaged_table_loads(self):
        table = load_warning_table()

        assert table.msvc[0] == "/W4"
        assert list(table.gnu_base) == GNU_BASE
        assert list(table.gnu_cxx) == GNU_CXX_SHARED

    def test_table_is_cached(self):
        assert load_warning_table() is load_warning_table()

    def test_missing_file(self, tmp_path):
        with pytest.raises(WarningTableError, match="not found"):
            load_warning_table(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("msvc: [unclosed\n")

        with pytest.raises(WarningTableError, match="Invalid YAML"):
            load_warning_table(path)

    def test_not_a_mapping(self):
        with pytest.raises(WarningTableError, match="mapping"):
            parse_warning_table(["-Wall"])

    def test_missing_section(self):
        with pytest.raises(WarningTableError, match="gnu"):
            parse_warning_table({"msvc": {"common": ["/W4"]}})

    def test_non_string_flags(self):
        data = {"msvc": {"common": [4]}, "gnu": {"base": []}}

        with pytest.raises(WarningTableError, match="msvc.common"):
            parse_warning_table(data)

    def test_custom_table(self, tmp_path):
        path = tmp_path / "warnings.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "msvc": {"common": ["/W3"]},
                    "gnu": {
                        "base": ["-Wall"],
                        "cxx": ["-Wextra"],
                        "compilers": {"Clang": {"cxx": ["-Weverything"]}},
                    },
                }
            )
        )
        table = load_warning_table(path)
        resolver = WarningFlagsResolver(table)

        flags = resolver.resolve(
            _profile(CompilerFamily.CLANG_GNU_FRONTEND, "Clang"), Options()
        )

        assert flags.compile_flags("C") == ["-Wall"]
        assert flags.compile_flags("CXX") == ["-Wall", "-Wextra", "-Weverything"]


@pytest.mark.unit
class TestMsvcDialect:
    """Tests for MSVC-style warning flags."""

    @pytest.mark.parametrize(
        "family", [CompilerFamily.MSVC, CompilerFamily.CLANG_MSVC_FRONTEND]
    )
    def test_msvc_dialect(self, resolver, family):
        flags = resolver.resolve(
            _profile(family, "MSVC", TargetOS.WINDOWS, libc_kind=LibcKind.MSVCRT),
            Options(),
        )

        cxx = flags.compile_flags("CXX")
        assert cxx[:4] == ["/W4", "/permissive-", "/sdl", "/utf-8"]
        assert len(cxx) == 23
        assert all(_is_msvc_flag(f) for f in cxx)
        assert flags.compile_flags("C") == cxx
        assert flags.link_items == ()

    def test_c4289_is_error(self, resolver):
        flags = resolver.resolve(
            _profile(CompilerFamily.MSVC, "MSVC", TargetOS.WINDOWS), Options()
        )

        cxx = flags.compile_flags("CXX")
        assert "/we4289" in cxx
        assert "/w14289" not in cxx
        assert [f for f in cxx if f.startswith("/we")] == ["/we4289"]


@pytest.mark.unit
class TestGnuDialect:
    """Tests for GCC/Clang-style warning flags."""

    def test_gcc(self, resolver):
        flags = resolver.resolve(_profile(CompilerFamily.GNU, "GNU"), Options())

        assert flags.compile_flags("C") == GNU_BASE + ["-Wmissing-declarations"]
        assert flags.compile_flags("CXX") == GNU_BASE + GNU_CXX_SHARED + GCC_CXX_EXTRAS

    def test_clang(self, resolver):
        flags = resolver.resolve(
            _profile(CompilerFamily.CLANG_GNU_FRONTEND, "Clang"), Options()
        )

        assert flags.compile_flags("C") == GNU_BASE
        assert flags.compile_flags("CXX") == (
            GNU_BASE + GNU_CXX_SHARED + ["-Wshorten-64-to-32"]
        )

    def test_clang_gnu_driver_on_msvc_target(self, resolver):
        flags = resolver.resolve(
            _profile(
                CompilerFamily.CLANG_GNU_FRONTEND_ON_MSVC_TARGET,
                "Clang",
                TargetOS.WINDOWS,
            ),
            Options(),
        )

        cxx = flags.compile_flags("CXX")
        assert "-Wshorten-64-to-32" in cxx
        assert not any(_is_msvc_flag(f) for f in cxx)

    def test_mingw_clang_gets_clang_extras(self, resolver):
        profile = _profile(CompilerFamily.GNU, "Clang", TargetOS.WINDOWS, is_mingw=True)

        cxx = resolver.resolve(profile, Options()).compile_flags("CXX")

        assert "-Wshorten-64-to-32" in cxx
        assert "-Wlogical-op" not in cxx

    def test_gcc_only_flags_absent_for_clang(self, resolver):
        flags = resolver.resolve(
            _profile(CompilerFamily.CLANG_GNU_FRONTEND, "Clang"), Options()
        )

        for flag in GCC_CXX_EXTRAS:
            assert flag not in flags.compile_flags("CXX")
        assert "-Wmissing-declarations" not in flags.compile_flags("C")


@pytest.mark.unit
class TestDialectsNeverMix:
    """Every resolved set uses exactly one dialect."""

    @pytest.mark.parametrize(
        "family,compiler_id",
        [
            (CompilerFamily.MSVC, "MSVC"),
            (CompilerFamily.CLANG_MSVC_FRONTEND, "Clang"),
            (CompilerFamily.CLANG_GNU_FRONTEND_ON_MSVC_TARGET, "Clang"),
            (CompilerFamily.GNU, "GNU"),
            (CompilerFamily.GNU, "Clang"),
            (CompilerFamily.CLANG_GNU_FRONTEND, "Clang"),
        ],
    )
    def test_single_dialect(self, resolver, family, compiler_id):
        flags = resolver.resolve(_profile(family, compiler_id), Options())

        for language in ("C", "CXX"):
            kinds = {_is_msvc_flag(f) for f in flags.compile_flags(language)}
            assert len(kinds) == 1


@pytest.mark.unit
class TestUnsupported:
    """Tests for toolchains without warning flags."""

    def test_unknown_family_is_empty(self, resolver):
        flags = resolver.resolve(
            ToolchainProfile(target_os=TargetOS.MACOS, compiler_id="Clang"), Options()
        )

        assert flags.is_empty()

    def test_resolve_is_pure(self, resolver):
        profile = _profile(CompilerFamily.GNU, "GNU")

        assert resolver.resolve(profile, Options()) == resolver.resolve(
            profile, Options()
        )

    def test_options_do_not_affect_warnings(self, resolver):
        profile = _profile(CompilerFamily.GNU, "GNU")

        assert resolver.resolve(profile, Options()) == resolver.resolve(
            profile, Options(linux_static=True)
        )
