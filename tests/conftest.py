from __future__ import annotations

from pathlib import Path

import pytest

from faas_cli.scaffold import Bundle
from tests.utils import write_file


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep tests away from the real user configuration directory."""
    monkeypatch.delenv("FAAS_TEMPLATES", raising=False)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    monkeypatch.setenv("FAAS_CONFIG_HOME", str(tmp_path / "config-home"))


@pytest.fixture()
def sample_bundle() -> Bundle:
    return Bundle.from_mapping(
        {
            "/templates/go/http/go.mod": "module function\n",
            "/templates/go/http/handle.go": "package function\n",
            "/templates/go/http/cmd/main.go": "package main\n",
            "/templates/go/http/static": None,
            "/templates/go/events/handle.go": "package function // events\n",
            "/templates/node/http/index.js": "module.exports = () => {};\n",
        }
    )


@pytest.fixture()
def templates_root(tmp_path: Path) -> Path:
    """Local template repositories laid out as {repo}/{runtime}/{template}."""
    root = tmp_path / "templates"
    write_file(root / "boson" / "go" / "json" / "go.mod", "module json\n")
    write_file(root / "boson" / "go" / "json" / "handle.go", "package function // json\n")
    write_file(root / "boson" / "go" / "json" / "bin" / "run.sh", "#!/bin/sh\necho run\n", mode=0o750)
    write_file(root / "boson" / "node" / "json" / "index.js", "// json\n")
    # Same literal name as a built-in template
    write_file(root / "http" / "go" / "http" / "handle.go", "package function // local shadow\n")
    return root
