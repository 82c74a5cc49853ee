"""
Test fixtures and utilities for maestro-lint tests.

Provides flow text builders and a minimal clean flow used as the baseline
for most validator tests.
"""

import textwrap

import pytest

from maestro_lint.config.lint_config import reset_config


VALID_HEADER = textwrap.dedent("""\
    appId: com.example.app
    tags:
      - smoke
    name: "[ABC-1] - Login"
    onFlowStart:
      - runFlow: ../../common/subflows/setup.yaml
    onFlowComplete:
      - runFlow: ../../common/subflows/teardown.yaml
    """)

VALID_COMMANDS = textwrap.dedent("""\
    - tapOn:
        id: "login"
    - assertVisible:
        text: "Welcome"
    """)


def make_flow(commands: str = VALID_COMMANDS, header: str = VALID_HEADER) -> str:
    """Join a header and a command segment with a `---` separator."""
    return f"{header}---\n{textwrap.dedent(commands)}"


def messages(diagnostics):
    return [d.message for d in diagnostics]


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def valid_flow_text() -> str:
    """A minimal flow that produces no diagnostics."""
    return make_flow()


@pytest.fixture
def flow_dir(tmp_path):
    """
    Create a directory of flow files.

    Returns a Path with:
    - login-test.yaml (clean)
    - broken-test.yaml (unknown command)
    - notes.yaml (not matched by the default pattern)
    """
    root = tmp_path / "tests"
    root.mkdir()
    (root / "login-test.yaml").write_text(make_flow(), encoding="utf-8")
    (root / "broken-test.yaml").write_text(make_flow("- TapOn: login\n"), encoding="utf-8")
    (root / "notes.yaml").write_text("just: notes\n", encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """Keep MAESTRO_LINT_* variables and the config cache out of each test."""
    for var in ("MAESTRO_LINT_FILE_PATTERN", "MAESTRO_LINT_ROOT", "MAESTRO_LINT_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield
    reset_config()
