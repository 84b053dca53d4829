"""Shared fixtures and helpers for tests."""

from __future__ import annotations

import stat
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import pytest

_REPO_ROOT = Path(__file__).parent.parent


# ---------------------------------------------------------------------------
# Auto-marker: tag tests as "unit" or "integration" based on directory
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        test_path = Path(str(item.fspath))
        rel = test_path.relative_to(_REPO_ROOT / "tests")
        parts = rel.parts
        if parts and parts[0] == "integration":
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)


# ---------------------------------------------------------------------------
# Stand-in formatter: a shell script that records its arguments
# ---------------------------------------------------------------------------


@dataclass
class FakeFormatter:
    program: Path
    log: Path

    def invocations(self) -> list[list[str]]:
        """Return the argument lists of every run, in order."""
        if not self.log.exists():
            return []
        runs: list[list[str]] = []
        current: list[str] = []
        for line in self.log.read_text(encoding="utf-8").splitlines():
            if line == "---":
                runs.append(current)
                current = []
            else:
                current.append(line)
        return runs

    def working_dirs(self) -> list[str]:
        pwd_log = self.log.with_suffix(".pwd")
        if not pwd_log.exists():
            return []
        return pwd_log.read_text(encoding="utf-8").splitlines()


_SCRIPT = """#!/bin/sh
for arg in "$@"; do
  printf '%s\\n' "$arg" >> "{log}"
done
echo "---" >> "{log}"
pwd >> "{pwd_log}"
cat "{stderr}" >&2
exit {status}
"""


@pytest.fixture
def fake_formatter(tmp_path: Path) -> Callable[..., FakeFormatter]:
    """Build an executable that logs its argv, writes *stderr* and exits with *status*."""

    def _make(status: int = 0, stderr: str = "", name: str = "fake-rustfmt") -> FakeFormatter:
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        log = bin_dir / f"{name}.log"
        stderr_file = bin_dir / f"{name}.stderr"
        stderr_file.write_text(stderr, encoding="utf-8")
        program = bin_dir / name
        program.write_text(
            _SCRIPT.format(log=log, pwd_log=log.with_suffix(".pwd"), stderr=stderr_file, status=status),
            encoding="utf-8",
        )
        program.chmod(program.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return FakeFormatter(program=program, log=log)

    return _make


SAMPLE_DIFF = """\
diff --git a/src/lib.rs b/src/lib.rs
index 1111111..2222222 100644
--- a/src/lib.rs
+++ b/src/lib.rs
@@ -1,5 +1,5 @@
-fn a(){}
-fn b(){}
-fn c(){}
-fn d(){}
-fn e(){}
+fn a() {}
+fn b() {}
+fn c() {}
+fn d() {}
+fn e() {}
@@ -20,0 +20,2 @@
+fn f(){}
+fn g(){}
diff --git a/README.md b/README.md
index 4444444..5555555 100644
--- a/README.md
+++ b/README.md
@@ -1 +1 @@
-old
+new
diff --git a/src/main.rs b/src/main.rs
index 6666666..7777777 100644
--- a/src/main.rs
+++ b/src/main.rs
@@ -1 +1 @@
-fn main(){}
+fn main() {}
diff --git a/src/old.rs b/src/old.rs
deleted file mode 100644
index 3333333..0000000
--- a/src/old.rs
+++ /dev/null
@@ -1,2 +0,0 @@
-fn x() {}
-fn y() {}
"""


@pytest.fixture
def sample_diff() -> str:
    return SAMPLE_DIFF
