from __future__ import annotations

from pathlib import Path

import pytest

from tests.samples import OPENAPI_YAML, PLAIN_YAML, SAMPLE_MARKDOWN


@pytest.fixture()
def docs_dir(tmp_path: Path) -> Path:
    root = tmp_path / "docs"
    (root / "guide").mkdir(parents=True)
    (root / "a.md").write_text(SAMPLE_MARKDOWN, encoding="utf-8")
    (root / "b.yaml").write_text(OPENAPI_YAML, encoding="utf-8")
    (root / "plain.yaml").write_text(PLAIN_YAML, encoding="utf-8")
    (root / "notes.txt").write_text("not an item", encoding="utf-8")
    (root / "guide" / "intro.md").write_text("# Intro\n\nWelcome to the [guide](../a.md#hola).\n", encoding="utf-8")
    return root
