from __future__ import annotations

"""
Unit tests for Route Path and Identifier Transforms.

Verifies accessor tokens, export naming, template construction and the
prefix-stripping rules.
"""

import re

import pytest

from next_introspect.core.routing.identifiers import (
    accessor_tokens,
    build_template,
    export_name,
    has_params,
    param_bindings,
    sanitize_identifier,
    segment_token,
    strip_path_prefixes,
)

_IDENTIFIER_RX = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def test_dynamic_tokens() -> None:
    assert segment_token("[slug]") == "bySlug"
    assert segment_token("[...slug]") == "bySlugRest"
    assert segment_token("[[...slug]]") == "bySlugOptional"


def test_static_tokens_are_sanitized() -> None:
    assert segment_token("user-profile") == "userProfile"
    assert segment_token("v1.2") == "v1_2"
    assert segment_token("404") == "_404"


def test_hyphen_camel_case_only_before_lowercase() -> None:
    """An uppercase letter after a hyphen is kept and the hyphen becomes '_'."""
    assert sanitize_identifier("about-us") == "aboutUs"
    assert sanitize_identifier("about-Us") == "about_Us"


@pytest.mark.parametrize("raw", ["", "404", "a b", "ümlaut", "-x", "$ok", "x.y.z", "日本"])
def test_sanitize_is_total(raw: str) -> None:
    """Every input yields a valid identifier."""
    assert _IDENTIFIER_RX.match(sanitize_identifier(raw))


def test_accessor_tokens_scenario() -> None:
    assert accessor_tokens("/blog/[slug]") == ["blog", "bySlug"]
    assert accessor_tokens("/") == ["index"]


def test_export_name_reserved_words() -> None:
    """Reserved identifiers receive the '_route' suffix."""
    assert export_name(["default"]) == "default_route"
    assert export_name(["new"]) == "new_route"
    assert export_name(["blog", "bySlug"]) == "blog_bySlug"


def test_build_template_scenario() -> None:
    template = build_template("/blog/[slug]")

    assert template is not None
    assert template.params == ["slug"]
    assert template.template == "/blog/${slug}"
    assert template.example == "/blog/<slug>"
    assert template.path == "/blog/[slug]"


def test_build_template_catch_all_forms() -> None:
    template = build_template("/docs/[[...rest]]")
    assert template is not None
    assert template.template == "/docs/${rest}"


def test_build_template_sanitizes_parameter_bindings() -> None:
    """Hyphenated parameters keep their name but interpolate a safe local."""
    template = build_template("/posts/[post-id]")

    assert template is not None
    assert template.params == ["post-id"]
    assert template.bindings == ["postId"]
    assert template.template == "/posts/${postId}"
    assert template.example == "/posts/<post-id>"


def test_param_bindings_avoid_reserved_words_and_clashes() -> None:
    assert param_bindings(["class", "id"]) == ["class_route", "id"]
    assert param_bindings(["a-b", "aB"]) == ["aB", "aB_2"]


def test_static_segment_brackets_are_not_slots() -> None:
    template = build_template("/a[b]c/[id]")
    assert template is not None
    assert template.template == "/a[b]c/${id}"


def test_static_path_has_no_template() -> None:
    assert build_template("/about") is None
    assert has_params("/about") is False
    assert has_params("/[id]") is True


def test_strip_literal_prefix() -> None:
    assert strip_path_prefixes("/docs/intro", ["/docs"]) == "/intro"


def test_strip_regex_prefix() -> None:
    assert strip_path_prefixes("/site/abc/page", [r"//^\/site\/[^/]+//"]) == "/page"


def test_strip_first_matching_rule_wins() -> None:
    assert strip_path_prefixes("/a/b/c", ["/a/b", "/a"]) == "/c"
    assert strip_path_prefixes("/a/b/c", ["/a", "/a/b"]) == "/b/c"


def test_strip_reanchors_and_ignores_non_matching() -> None:
    assert strip_path_prefixes("/docs", ["/docs"]) == "/"
    assert strip_path_prefixes("/blog", ["/docs"]) == "/blog"


def test_invalid_regex_rule_is_skipped() -> None:
    assert strip_path_prefixes("/x/y", ["//[unclosed//", "/x"]) == "/y"
