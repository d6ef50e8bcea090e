from __future__ import annotations

from datetime import date

import pytest

from blogbuild.decision import RenderDecision, decide
from blogbuild.frontmatter import FrontMatter
from blogbuild.site import SiteParams


def test_bio_shown_when_flag_absent(site):
    fm = {"title": "Post A", "date": date(2025, 11, 14)}

    decision = decide(fm, site)

    assert decision == RenderDecision(
        show_author_bio=True,
        author_name="Gaurav Padam",
        author_description="Writes about data platforms.",
        author_linkedin="https://linkedin.com/in/x",
    )


def test_bio_hidden_when_flag_true(site):
    fm = {"title": "Post B", "date": date(2025, 11, 14), "hide_author_bio": True}
    assert decide(fm, site).show_author_bio is False


def test_bio_shown_when_flag_explicitly_false(site):
    fm = {"title": "Post C", "hide_author_bio": False}
    assert decide(fm, site).show_author_bio is True


def test_missing_linkedin_degrades_to_empty_string():
    site = SiteParams.from_config(
        {"params": {"authors_name": "Gaurav Padam", "authors_description": "..."}}
    )

    decision = decide({"title": "Post A", "date": date(2025, 11, 14)}, site)

    assert decision.show_author_bio is True
    assert decision.author_linkedin == ""
    assert decision.author_name == "Gaurav Padam"


@pytest.mark.parametrize("value", ["true", "yes", 1, None])
def test_only_boolean_true_hides(site, value):
    assert decide({"title": "x", "hide_author_bio": value}, site).show_author_bio is True


def test_author_fields_never_come_from_page(site):
    fm = {
        "title": "Guest post",
        "authors_name": "Someone Else",
        "author_name": "Someone Else",
        "authors_linkedin": "https://example.com",
    }

    decision = decide(fm, site)

    assert decision.author_name == site.authors_name
    assert decision.author_description == site.authors_description
    assert decision.author_linkedin == site.authors_linkedin


def test_decide_is_idempotent(site):
    fm = FrontMatter.from_mapping({"title": "Post A", "hide_author_bio": True})
    assert decide(fm, site) == decide(fm, site)
    assert fm.hide_author_bio is True


def test_typed_and_mapping_front_matter_agree(site):
    raw = {"title": "Post B", "hide_author_bio": True}
    assert decide(raw, site) == decide(FrontMatter.from_mapping(raw), site)


def test_site_auto_switch_does_not_change_decision(site):
    manual_only = SiteParams(
        authors_name=site.authors_name,
        authors_description=site.authors_description,
        authors_linkedin=site.authors_linkedin,
        auto_author_bio=False,
    )
    assert decide({"title": "x"}, manual_only).show_author_bio is True


def test_site_params_given_as_plain_mapping():
    params = {"authors_name": "Gaurav Padam", "Authors_Description": "d"}

    decision = decide({"title": "x"}, params)

    assert decision.author_name == "Gaurav Padam"
    assert decision.author_description == "d"
    assert decision.author_linkedin == ""
    assert decision == decide({"title": "x"}, SiteParams.from_config({"params": params}))
