"""
C library detection by compile probe.

The musl C library cannot be recognized from compiler identity strings,
so the probe compiles a tiny translation unit that only builds when the
musl marker macro is defined. Any failure to run the probe yields
LibcKind.UNKNOWN, which the resolvers treat like glibc.
"""

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import Optional

from .profile import LibcKind

logger = logging.getLogger(__name__)

MUSL_MARKER_ERROR = "not musl"

PROBE_SOURCE = f"""
#include <features.h>
#if defined(__MUSL__)
int main(){{return 0;}}
#else
#error {MUSL_MARKER_ERROR}
#endif
"""


class LibcProbe:
    """Detect musl vs glibc by compiling a probe source."""

    def __init__(self, timeout: float = 30):
        """
        Initialize libc probe.

        Args:
            timeout: Seconds to wait for the compiler
        """
        self.timeout = timeout

    def probe(self, compiler_path: Optional[Path]) -> LibcKind:
        """
        Compile the probe source with the given C++ compiler.

        Args:
            compiler_path: C++ compiler executable, None if unknown

        Returns:
            MUSL if the probe compiles, GLIBC if it fails on the musl
            check, UNKNOWN if the compiler could not be run
        """
        if compiler_path is None:
            logger.debug("No compiler available for libc probe")
            return LibcKind.UNKNOWN

        try:
            result = self._compile(compiler_path)
        except subprocess.TimeoutExpired:
            logger.debug(f"libc probe timed out with {compiler_path}")
            return LibcKind.UNKNOWN
        except OSError as e:
            logger.debug(f"libc probe could not run {compiler_path}: {e}")
            return LibcKind.UNKNOWN

        if result.returncode == 0:
            logger.debug("libc probe compiled: musl")
            return LibcKind.MUSL

        if MUSL_MARKER_ERROR in result.stderr + result.stdout:
            logger.debug("libc probe hit musl check: glibc-like")
            return LibcKind.GLIBC

        logger.debug(f"libc probe failed: {result.stderr[:200]}")
        return LibcKind.UNKNOWN

    def _compile(self, compiler_path: Path) -> subprocess.CompletedProcess:
        with tempfile.TemporaryDirectory(prefix="sqflags-probe-") as tmpdir:
            tmpdir_path = Path(tmpdir)
            source_file = tmpdir_path / "libc_probe.cpp"
            object_file = tmpdir_path / "libc_probe.o"
            source_file.write_text(PROBE_SOURCE, encoding="utf-8")

            # Diagnostics may be in a legacy locale encoding
            return subprocess.run(
                [str(compiler_path), "-c", str(source_file), "-o", str(object_file)],
                capture_output=True,
                encoding="utf-8",
                errors="replace",
                timeout=self.timeout,
                cwd=tmpdir_path,
                check=False,
            )
