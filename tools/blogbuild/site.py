from __future__ import annotations

import pathlib
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Dict

from .config import SITE_CONFIG_CANDIDATES
from .utils import read_toml, read_yaml


@dataclass(frozen=True)
class SiteParams:
    """Site-wide author parameters, loaded once per build."""

    authors_name: str = ""
    authors_description: str = ""
    authors_linkedin: str = ""
    # Only controls the automatic end-of-page include, never the decision.
    auto_author_bio: bool = True

    @classmethod
    def from_config(cls, config: Any) -> "SiteParams":
        params = config.get("params") if isinstance(config, Mapping) else None
        if not isinstance(params, Mapping):
            params = {}
        # Hugo treats param keys case-insensitively
        params = {str(k).lower(): v for k, v in params.items()}

        def _str(key: str) -> str:
            v = params.get(key)
            return "" if v is None else str(v)

        auto = params.get("auto_author_bio")
        return cls(
            authors_name=_str("authors_name"),
            authors_description=_str("authors_description"),
            authors_linkedin=_str("authors_linkedin"),
            auto_author_bio=auto if isinstance(auto, bool) else True,
        )


def find_site_config(root: pathlib.Path) -> pathlib.Path | None:
    for name in SITE_CONFIG_CANDIDATES:
        path = root / name
        if path.is_file():
            return path
    return None


def load_site_config(root: pathlib.Path) -> Dict[str, Any]:
    path = find_site_config(root)
    if path is None:
        print(f"- no site config in {root}, using empty params")
        return {}
    if path.suffix == ".toml":
        return read_toml(path)
    return read_yaml(path)


def load_site_params(root: pathlib.Path) -> SiteParams:
    return SiteParams.from_config(load_site_config(root))
