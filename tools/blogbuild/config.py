#!/usr/bin/env python3
from __future__ import annotations

import pathlib
import re

# ---------- Paths

# This assumes config.py sits in tools/blogbuild/ at the repo root.
ROOT = pathlib.Path(__file__).resolve().parents[2]
TEMPLATE_DIR = ROOT / "tools" / "templates"
CONTENT_DIR_NAME = "content"
BUILD_DIR_NAME = "build"

# ---------- Config

SITE_CONFIG_CANDIDATES = (
    "hugo.yaml",
    "hugo.yml",
    "hugo.toml",
    "config.yaml",
    "config.yml",
    "config.toml",
)
SITE_TEMPLATE_DIR_NAME = "templates"
AUTHOR_BIO_TEMPLATE = "author_bio.html.j2"
SECTION_INDEX_NAME = "_index"

# Some shared regexes

YAML_FENCE = "---"
TOML_FENCE = "+++"
AUTHOR_BIO_SHORTCODE = re.compile(
    r'\{\{<\s*author-bio\s*/?\s*>\}\}|\{\{%\s*author-bio\s*/?\s*%\}\}'
)
FENCE = re.compile(r"^(?P<fence>`{3,}|~{3,})[^\n]*$.*?^(?P=fence)[ \t]*$",
                   re.MULTILINE | re.DOTALL)
INLINE_CODE = re.compile(r"(?P<ticks>`+)[^\n]*?(?<!`)(?P=ticks)(?!`)")
SLUG_RE = re.compile(r"[^a-z0-9-]+")
