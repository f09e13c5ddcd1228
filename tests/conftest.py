"""Shared pytest setup for potsync.

Hypothesis example budgets live here and nowhere else:
- dev (default): 500 examples per property
- ci: 50 examples, derandomized, selected when CI=true
- verbose: 100 examples with per-example output

HYPOTHESIS_PROFILE=<name> overrides the automatic choice.

Tests marked ``@pytest.mark.fuzz`` are long-running fixed-point checks of
the merge engine. They are skipped unless requested with ``pytest -m fuzz``
or by naming tests/test_sync_properties.py on the command line.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest
from hypothesis import Phase, Verbosity, settings

# =============================================================================
# HYPOTHESIS PROFILES
# =============================================================================

settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


# =============================================================================
# PROFILE SELECTION
# =============================================================================


_PROFILES = ("dev", "ci", "verbose")


def _detect_profile() -> str:
    """Pick the profile: HYPOTHESIS_PROFILE, then CI=true, then dev."""
    requested = os.environ.get("HYPOTHESIS_PROFILE")
    if requested in _PROFILES:
        return requested
    return "ci" if os.environ.get("CI") == "true" else "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZ MARKER
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "fuzz: long-running merge fixed-point checks (run with -m fuzz)"
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip fuzz tests unless selected by marker or by naming their module."""
    if "fuzz" in str(config.getoption("-m", default="")):
        return
    if any("test_sync_properties" in str(arg) for arg in config.invocation_params.args):
        return

    skip_fuzz = pytest.mark.skip(reason="fuzz test; run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# SHARED FIXTURES
# =============================================================================


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A small source tree with one file per call shape.

    Layout::

        src/app.ts          t() and tp() calls
        src/list.tsx        tn() and tnp() calls
        src/node_modules/   ignored directory with a call inside
        src/notes.txt       extension not scanned by default
    """
    src = tmp_path / "src"
    src.mkdir()
    (src / "app.ts").write_text(
        "const a = t('Save');\nconst b = tp('menu', 'Open');\nt(\"Save\");\n",
        encoding="utf-8",
    )
    (src / "list.tsx").write_text(
        "tn('{n} item', '{n} items');\n"
        "tnp('inbox', '{n} message', '{n} messages');\n",
        encoding="utf-8",
    )
    vendored = src / "node_modules" / "lib"
    vendored.mkdir(parents=True)
    (vendored / "index.js").write_text("t('Vendored')\n", encoding="utf-8")
    (src / "notes.txt").write_text("t('Not scanned')\n", encoding="utf-8")
    return tmp_path
