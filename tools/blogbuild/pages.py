from __future__ import annotations

import pathlib
import re
import shutil
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

import nbformat
from jinja2 import Environment
from nbconvert import MarkdownExporter
from nbformat.validator import validate

from .config import SECTION_INDEX_NAME
from .decision import decide
from .frontmatter import FrontMatter
from .git import git_last_commit_date
from .partials import compose_author_bio
from .site import SiteParams
from .utils import (
    _norm_text,
    coerce_bool,
    parse_frontmatter,
    short_hash,
    slugify,
    yaml_frontmatter_block,
)

_NOTEBOOK_FM_KEYS = ("title", "date", "draft", "hide_author_bio", "tags", "description")
_H1_RE = re.compile(r'^\s*#\s+(.+?)\s*$', re.MULTILINE)


def _warn_suspicious(raw: Mapping[str, Any], rel_key: str) -> None:
    hide = raw.get("hide_author_bio")
    if hide is not None and not isinstance(hide, bool):
        print(f"! {rel_key}: ignoring non-boolean hide_author_bio={hide!r}")
    draft = raw.get("draft")
    if draft is not None and not isinstance(draft, bool):
        print(f"! {rel_key}: draft={draft!r} read as {coerce_bool(draft)}")
    if raw.get("date") is not None and FrontMatter.from_mapping(raw).date is None:
        print(f"! {rel_key}: unparseable date {raw.get('date')!r}")


def _skip_draft(rel_key: str, out: pathlib.Path) -> None:
    print(f"= {rel_key} is a draft, skip")
    # output from an earlier build would keep the draft published
    if out.is_dir():
        shutil.rmtree(out)
        print(f"- removed stale {out.name}/")
    elif out.exists():
        out.unlink()
        print(f"- removed stale {out.name}")


def _write_page(
    fm: FrontMatter,
    body: str,
    source: pathlib.Path,
    out_path: pathlib.Path,
    rel_key: str,
    site: SiteParams,
    env: Optional[Environment],
    include_drafts: bool,
    kind: str,
) -> Optional[Dict[str, Any]]:
    if fm.draft and not include_drafts:
        _skip_draft(rel_key, out_path)
        return None

    if not fm.title:
        fm.title = source.stem.replace("-", " ").replace("_", " ").title()
    if fm.date is None:
        fm.date = git_last_commit_date(source) or datetime.now().date()

    show = False
    if pathlib.PurePosixPath(rel_key).name != SECTION_INDEX_NAME:
        decision = decide(fm, site)
        show = decision.show_author_bio
        body = compose_author_bio(
            body, decision, auto=site.auto_author_bio, env=env
        )

    body = body.strip("\n")
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(
        yaml_frontmatter_block(fm.to_mapping()) + body + "\n", encoding="utf-8"
    )

    print(f"✓ wrote {kind} {rel_key}" + (" with author bio" if show else ""))
    return {
        "title": fm.title,
        "date": fm.date,
        "rel_key": rel_key,
        "show_author_bio": show,
        "outputs": [out_path],
    }


def process_markdown(
    md: pathlib.Path,
    rel_key: str,
    site: SiteParams,
    out_root: pathlib.Path,
    env: Optional[Environment] = None,
    include_drafts: bool = False,
) -> Optional[Dict[str, Any]]:
    text = _norm_text(md.read_text(encoding="utf-8"))
    raw, body = parse_frontmatter(text)
    if raw is None:
        print(f"- {rel_key} has no front matter")
        raw = {}
    elif not isinstance(raw, Mapping):
        print(f"! {rel_key}: front matter is not a mapping, ignoring it")
        raw = {}
    _warn_suspicious(raw, rel_key)

    return _write_page(
        FrontMatter.from_mapping(raw),
        body,
        md,
        out_root / f"{rel_key}.md",
        rel_key,
        site,
        env,
        include_drafts,
        "markdown",
    )


def _notebook_frontmatter(nb) -> Dict[str, Any]:
    meta = nb.metadata or {}
    raw = dict(meta.get("frontmatter") or {})
    for k in _NOTEBOOK_FM_KEYS:
        if k in meta:
            raw.setdefault(k, meta[k])
    if "title" not in raw:
        for cell in nb.cells:
            if cell.get("cell_type") != "markdown":
                continue
            m = _H1_RE.search(_norm_text(cell.get("source", "")))
            if m:
                raw["title"] = m.group(1).strip()
                break
    return raw


def process_notebook(
    ipynb: pathlib.Path,
    rel_key: str,
    site: SiteParams,
    out_root: pathlib.Path,
    env: Optional[Environment] = None,
    include_drafts: bool = False,
) -> Optional[Dict[str, Any]]:
    """Export a notebook as a page bundle: <rel_key>/index.md plus outputs."""
    nb = nbformat.read(str(ipynb), as_version=4)
    validate(nb)

    raw = _notebook_frontmatter(nb)
    _warn_suspicious(raw, rel_key)
    fm = FrontMatter.from_mapping(raw)
    out_dir = out_root / rel_key
    if fm.draft and not include_drafts:
        _skip_draft(rel_key, out_dir)
        return None

    body, res = MarkdownExporter().from_notebook_node(nb)

    blobs = []
    # output blobs get content-hashed names
    for name, data in list((res.get("outputs") or {}).items()):
        p = pathlib.Path(name)
        new_name = f"{slugify(p.stem) or 'output'}.{short_hash(data)}{p.suffix}"
        out_dir.mkdir(parents=True, exist_ok=True)
        (out_dir / new_name).write_bytes(data)
        blobs.append(out_dir / new_name)
        if new_name != name:
            body = body.replace(name, new_name)

    info = _write_page(
        fm,
        _norm_text(body),
        ipynb,
        out_dir / "index.md",
        rel_key,
        site,
        env,
        include_drafts,
        "notebook",
    )
    if info is not None:
        info["outputs"].extend(blobs)
    return info
