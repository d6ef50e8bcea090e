#!/usr/bin/env python3
"""
Build-time preprocessor for a Hugo blog's content tree.

- content/**/*.md    -> <out>/**/*.md
- content/**/*.ipynb -> <out>/**/<name>/index.md (+ notebook outputs)
- anything else under content/ is copied through unchanged

Per page:
- YAML (---) or TOML (+++) front matter, rewritten as YAML
- author bio from site `params` (authors_name, authors_description,
  authors_linkedin), appended at the end of the page unless the page sets
  `hide_author_bio: true`
- `{{< author-bio >}}` markers place the bio by hand; set
  `params.auto_author_bio: false` to turn the automatic include off
- drafts skipped unless --drafts; `_index.md` section pages get no bio
- dates written as plain YYYY-MM-DD (or RFC 3339 when they carry a time),
  falling back to git history
- outputs with no source left (deleted pages, new drafts) are removed
"""

from __future__ import annotations

import argparse
import hashlib
import pathlib
import shutil
import sys
from typing import Any, Dict, List, Set

import yaml
from jinja2 import TemplateError
from nbformat import ValidationError

from .config import BUILD_DIR_NAME, CONTENT_DIR_NAME, ROOT
from .pages import process_markdown, process_notebook
from .partials import template_environment
from .site import load_site_params
from .utils import natural_key


class BuildError(RuntimeError):
    """One or more pages failed to build."""

    def __init__(self, failures: List[str]):
        super().__init__(f"{len(failures)} page(s) failed: {', '.join(failures)}")
        self.failures = failures


def copy_resource(src: pathlib.Path, dst: pathlib.Path) -> bool:
    if dst.exists() and (
        hashlib.sha256(src.read_bytes()).hexdigest()
        == hashlib.sha256(dst.read_bytes()).hexdigest()
    ):
        return False
    dst.parent.mkdir(parents=True, exist_ok=True)
    shutil.copy2(src, dst)
    return True


def prune_stale(out_root: pathlib.Path, keep: Set[pathlib.Path]) -> None:
    """
    Remove output files whose source page or resource is gone, then any
    directories left empty.
    """
    if not out_root.exists():
        return
    for p in sorted(out_root.rglob("*"), reverse=True):
        if p.is_file() and p not in keep:
            print(f"- removing stale {p.relative_to(out_root).as_posix()}")
            p.unlink()
        elif p.is_dir() and not any(p.iterdir()):
            p.rmdir()


def build(
    root: pathlib.Path,
    out_root: pathlib.Path,
    include_drafts: bool = False,
) -> List[Dict[str, Any]]:
    content_dir = root / CONTENT_DIR_NAME
    if not content_dir.is_dir():
        raise FileNotFoundError(f"content directory missing: {content_dir}")

    site = load_site_params(root)
    env = template_environment(root)

    pages: List[Dict[str, Any]] = []
    failures: List[str] = []
    keep: Set[pathlib.Path] = set()
    sources = sorted(
        (
            p for p in content_dir.rglob("*")
            if p.is_file()
            # .ipynb_checkpoints and friends
            and not any(part.startswith(".") for part in p.relative_to(content_dir).parts)
        ),
        key=lambda p: natural_key(p.relative_to(content_dir).as_posix()),
    )
    for p in sources:
        rel = p.relative_to(content_dir)
        rel_key = rel.with_suffix("").as_posix()
        suffix = p.suffix.lower()
        try:
            if suffix == ".md":
                info = process_markdown(p, rel_key, site, out_root, env, include_drafts)
            elif suffix == ".ipynb":
                info = process_notebook(p, rel_key, site, out_root, env, include_drafts)
            else:
                keep.add(out_root / rel)
                if copy_resource(p, out_root / rel):
                    print(f"✓ copied {rel.as_posix()}")
                continue
        except (yaml.YAMLError, ValueError, ValidationError, TemplateError, OSError) as e:
            print(f"! failed {rel.as_posix()}: {e}")
            failures.append(rel.as_posix())
            continue
        if info is not None:
            pages.append(info)
            keep.update(info["outputs"])

    shown = sum(1 for info in pages if info["show_author_bio"])
    print(f"✓ built {len(pages)} pages ({shown} with author bio)")
    if failures:
        # a failed page keeps its last good output
        raise BuildError(failures)
    prune_stale(out_root, keep)
    return pages


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Compose author bios into a Hugo content tree."
    )
    parser.add_argument("--root", type=pathlib.Path, default=ROOT,
                        help="Site root holding the config and content/.")
    parser.add_argument("--out", type=pathlib.Path, default=None,
                        help="Output content directory (default: <root>/build/content).")
    parser.add_argument("--drafts", action="store_true",
                        help="Include pages marked draft: true.")
    args = parser.parse_args(argv)

    root = args.root.resolve()
    out_root = args.out or root / BUILD_DIR_NAME / CONTENT_DIR_NAME

    try:
        build(root, out_root, include_drafts=args.drafts)
    except FileNotFoundError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    except BuildError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
