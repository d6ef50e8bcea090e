from __future__ import annotations

import pathlib
from typing import Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .config import (
    AUTHOR_BIO_SHORTCODE,
    AUTHOR_BIO_TEMPLATE,
    SITE_TEMPLATE_DIR_NAME,
    TEMPLATE_DIR,
)
from .decision import RenderDecision
from .utils import map_noncode, map_noninline


def template_environment(site_root: Optional[pathlib.Path] = None) -> Environment:
    """Jinja environment for partials; a site's templates/ dir wins over ours."""
    search = [str(TEMPLATE_DIR)]
    if site_root is not None:
        site_templates = site_root / SITE_TEMPLATE_DIR_NAME
        if site_templates.is_dir():
            search.insert(0, str(site_templates))
    return Environment(
        loader=FileSystemLoader(search),
        autoescape=select_autoescape(["html", "html.j2"]),
        undefined=StrictUndefined,
        keep_trailing_newline=False,
    )


def render_author_bio(decision: RenderDecision, env: Optional[Environment] = None) -> str:
    if not decision.show_author_bio:
        return ""
    env = env or template_environment()
    template = env.get_template(AUTHOR_BIO_TEMPLATE)
    return template.render(
        author_name=decision.author_name,
        author_description=decision.author_description,
        author_linkedin=decision.author_linkedin,
    ).strip()


def compose_author_bio(
    body: str,
    decision: RenderDecision,
    auto: bool = True,
    env: Optional[Environment] = None,
) -> str:
    """Place the author bio into a Markdown body.

    Shortcode markers are replaced in place (or dropped when the bio is
    hidden). With `auto`, the bio is also appended at the end of the page.
    Both may fire on one page; nothing de-duplicates them.
    """
    block = render_author_bio(decision, env)

    def _place(m) -> str:
        if not block:
            return ""
        # an HTML block needs a blank line on each side
        before, after = m.string[: m.start()], m.string[m.end() :]
        lead = "" if not before or before.endswith("\n\n") else (
            "\n" if before.endswith("\n") else "\n\n"
        )
        trail = "" if not after or after.startswith("\n\n") else (
            "\n" if after.startswith("\n") else "\n\n"
        )
        return f"{lead}{block}{trail}"

    def _replace(s: str) -> str:
        return map_noninline(s, lambda t: AUTHOR_BIO_SHORTCODE.sub(_place, t))

    body = map_noncode(body, _replace)
    if auto and block:
        body = f"{body.rstrip()}\n\n{block}\n"
    return body
