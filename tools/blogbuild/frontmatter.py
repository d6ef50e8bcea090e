from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, Optional

from .utils import _coerce_date_like, coerce_bool, normalize_frontmatter_dates

_KNOWN_KEYS = ("title", "date", "draft", "hide_author_bio")


@dataclass
class FrontMatter:
    """Typed view of a page's front matter.

    `hide_author_bio` is tri-state: None means the page does not set it.
    Keys the build does not interpret are kept in `extra`, in source order.
    """

    title: str = ""
    date: Optional[date] = None
    draft: bool = False
    hide_author_bio: Optional[bool] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    # the page's own `draft` value, written back untouched
    draft_raw: Any = None

    @classmethod
    def from_mapping(cls, mapping: Any) -> "FrontMatter":
        if not isinstance(mapping, Mapping):
            mapping = {}

        title = mapping.get("title")
        title = "" if title is None else str(title)

        raw_date = _coerce_date_like(mapping.get("date"))
        fm_date = raw_date if isinstance(raw_date, date) else None

        hide = mapping.get("hide_author_bio")
        if not isinstance(hide, bool):
            hide = None

        return cls(
            title=title,
            date=fm_date,
            draft=coerce_bool(mapping.get("draft")),
            hide_author_bio=hide,
            extra={k: v for k, v in mapping.items() if k not in _KNOWN_KEYS},
            draft_raw=mapping.get("draft"),
        )

    def to_mapping(self) -> Dict[str, Any]:
        fm: Dict[str, Any] = {"title": self.title}
        if self.date is not None:
            fm["date"] = self.date
        if self.draft_raw is not None and coerce_bool(self.draft_raw) == self.draft:
            fm["draft"] = self.draft_raw
        elif self.draft_raw is not None or self.draft:
            fm["draft"] = self.draft
        if self.hide_author_bio is not None:
            fm["hide_author_bio"] = self.hide_author_bio
        fm.update(self.extra)
        return normalize_frontmatter_dates(fm)
