from __future__ import annotations

import hashlib
import pathlib
import re
import tomllib
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

import yaml

from .config import (
    FENCE,
    INLINE_CODE,
    SLUG_RE,
    TOML_FENCE,
    YAML_FENCE,
)


def slugify(s: str) -> str:
    return re.sub(r"-{2,}", "-", SLUG_RE.sub("-", s.lower()).strip("-"))


def natural_key(s: str):
    return [int(t) if t.isdigit() else t for t in re.split(r'(\d+)', s.lower())]


def read_yaml(path: pathlib.Path) -> Dict[str, Any]:
    if path.exists():
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return {}


def read_toml(path: pathlib.Path) -> Dict[str, Any]:
    if path.exists():
        return tomllib.loads(path.read_text(encoding="utf-8"))
    return {}


def short_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()[:8]


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def _coerce_date_like(v):
    # datetimes keep their time of day; same-day posts sort by it
    if isinstance(v, date):
        return v
    if isinstance(v, str):
        s = v.strip().strip('"').strip("'")
        try:
            return date.fromisoformat(s)
        except ValueError:
            pass
        try:
            return datetime.fromisoformat(s)
        except ValueError:
            return v
    return v


def coerce_bool(v) -> bool:
    """Truthiness the way Hugo casts front matter flags."""
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return v != 0
    if isinstance(v, str):
        return v.strip() in ("1", "t", "T", "true", "TRUE", "True")
    return False


def normalize_frontmatter_dates(
    fm: Dict[str, Any],
    keys=("date", "publishDate", "lastmod", "expiryDate"),
) -> Dict[str, Any]:
    if not isinstance(fm, dict):
        return fm
    for k in keys:
        if k in fm:
            fm[k] = _coerce_date_like(fm[k])
    return fm


class _FrontMatterDumper(yaml.SafeDumper):
    pass


# RFC 3339 with a "T", instead of PyYAML's space-separated default
_FrontMatterDumper.add_representer(
    datetime,
    lambda dumper, v: dumper.represent_scalar(
        "tag:yaml.org,2002:timestamp", v.isoformat()
    ),
)


def yaml_frontmatter_block(data: Dict[str, Any]) -> str:
    data = normalize_frontmatter_dates(dict(data))
    dumped = yaml.dump(
        data, Dumper=_FrontMatterDumper, sort_keys=False, allow_unicode=True
    ).rstrip()
    return f"---\n{dumped}\n---\n\n"


def parse_frontmatter(text: str) -> Tuple[Optional[Dict[str, Any]], str]:
    """Split a page into (front matter, body).

    YAML blocks are fenced with `---`, TOML blocks with `+++`. Returns
    `(None, text)` when the page has no closed front matter block.
    """
    s = text.lstrip()
    first = s.split("\n", 1)[0].strip()
    if first not in (YAML_FENCE, TOML_FENCE):
        return None, text

    lines = s.splitlines(keepends=True)
    for i in range(1, len(lines)):
        if lines[i].strip() == first:
            fm_text = "".join(lines[1:i])
            body = "".join(lines[i + 1 :])
            if first == TOML_FENCE:
                fm = tomllib.loads(fm_text)
            else:
                fm = yaml.safe_load(fm_text) or {}
            return fm, body
    return None, text


def map_noncode(md: str, fn):
    parts, last = [], 0
    for m in FENCE.finditer(md):
        pre = md[last : m.start()]
        parts.append(fn(pre))
        parts.append(md[m.start() : m.end()])
        last = m.end()
    parts.append(fn(md[last:]))
    return "".join(parts)


def map_noninline(md: str, fn):
    parts, last = [], 0
    for m in INLINE_CODE.finditer(md):
        parts.append(fn(md[last : m.start()]))
        parts.append(m.group(0))
        last = m.end()
    parts.append(fn(md[last:]))
    return "".join(parts)
