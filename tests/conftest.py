from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from blogbuild.site import SiteParams


def write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
    return path


@pytest.fixture
def site() -> SiteParams:
    return SiteParams(
        authors_name="Gaurav Padam",
        authors_description="Writes about data platforms.",
        authors_linkedin="https://linkedin.com/in/x",
    )


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    root = tmp_path / "site"
    write(
        root / "hugo.yaml",
        """
        title: Example Blog
        params:
          authors_name: Gaurav Padam
          authors_description: Writes about data platforms.
          authors_linkedin: https://linkedin.com/in/x
        """,
    )
    (root / "content").mkdir(parents=True)
    return root
