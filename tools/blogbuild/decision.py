from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .frontmatter import FrontMatter
from .site import SiteParams


@dataclass(frozen=True)
class RenderDecision:
    show_author_bio: bool
    author_name: str = ""
    author_description: str = ""
    author_linkedin: str = ""


def decide(
    front_matter: FrontMatter | Mapping[str, Any],
    site: SiteParams | Mapping[str, Any],
) -> RenderDecision:
    """Decide whether a page renders the author bio.

    Only an explicit `hide_author_bio: true` hides it. Author fields
    always come from the site params. A plain mapping for `site` is read
    as the contents of the config's `params` table.
    """
    if not isinstance(front_matter, FrontMatter):
        front_matter = FrontMatter.from_mapping(front_matter)
    if not isinstance(site, SiteParams):
        site = SiteParams.from_config({"params": site})

    return RenderDecision(
        show_author_bio=front_matter.hide_author_bio is not True,
        author_name=site.authors_name,
        author_description=site.authors_description,
        author_linkedin=site.authors_linkedin,
    )
