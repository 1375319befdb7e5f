from __future__ import annotations

"""
Route Path and Identifier Transforms.

Turns URL paths into identifier-safe accessor tokens, export names and
parameterized template strings for the generated source module. Also
implements the prefix-stripping rules applied to paths before rendering.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Sequence

from next_introspect.core.routing.segments import classify_segment, extract_route_params
from next_introspect.domain.constants import INDEX_KEY, RESERVED_SUFFIX, RESERVED_WORDS

logger = logging.getLogger(__name__)

_HYPHEN_RX = re.compile(r"-([a-z])")
_INVALID_CHAR_RX = re.compile(r"[^A-Za-z0-9_$]")
_VALID_START_RX = re.compile(r"^[A-Za-z_$]")

_REGEX_RULE_DELIMITER = "//"


@dataclass(frozen=True)
class RouteTemplate:
    """
    Callable template descriptor for a parameterized route.

    Attributes:
        path: Raw (possibly prefix-stripped) path with bracket placeholders.
        params: Parameter names in order of appearance.
        bindings: Identifier-safe local name of each parameter, same order.
        template: Template literal body with '${binding}' interpolation slots.
        example: Human-readable form with '<param>' placeholders.
    """
    path: str
    params: List[str]
    bindings: List[str]
    template: str
    example: str


# ==============================================================================
# PUBLIC API: ACCESSOR TOKENS
# ==============================================================================

def sanitize_identifier(name: str) -> str:
    """
    Make an arbitrary segment a valid identifier.

    A hyphen followed by a lowercase letter is camel-cased. Any other
    invalid character, including a remaining hyphen, becomes '_', and a
    leading '_' is added when the first character cannot start one.

    Args:
        name: Raw static segment.

    Returns:
        str: Identifier matching '^[A-Za-z_$][A-Za-z0-9_$]*$'.
    """
    sanitized = _HYPHEN_RX.sub(lambda m: m.group(1).upper(), name)
    sanitized = _INVALID_CHAR_RX.sub("_", sanitized)
    if not _VALID_START_RX.match(sanitized):
        sanitized = f"_{sanitized}"
    return sanitized


def segment_token(segment: str) -> str:
    """
    Accessor token of one URL segment.

    '[id]' -> 'byId', '[...slug]' -> 'bySlugRest',
    '[[...slug]]' -> 'bySlugOptional', static names are sanitized.

    Args:
        segment: One '/'-delimited URL segment.

    Returns:
        str: Identifier-safe token.
    """
    seg = classify_segment(segment)
    if seg.is_dynamic:
        param = seg.param_name or ""
        base = sanitize_identifier(f"by{param[:1].upper()}{param[1:]}")
        if seg.is_optional_catch_all:
            return f"{base}Optional"
        if seg.is_catch_all:
            return f"{base}Rest"
        return base
    return sanitize_identifier(segment)


def accessor_tokens(route_path: str) -> List[str]:
    """
    Accessor path of a URL path; the root maps to ['index'].

    Args:
        route_path: URL path, e.g. '/blog/[slug]'.

    Returns:
        List[str]: Identifier-safe tokens, e.g. ['blog', 'bySlug'].
    """
    parts = [p for p in route_path.split("/") if p]
    if not parts:
        return [INDEX_KEY]
    return [segment_token(p) for p in parts]


def export_name(tokens: Sequence[str]) -> str:
    """
    Join accessor tokens into a top-level binding name.

    Reserved words receive the '_route' suffix.

    Args:
        tokens: Accessor path.

    Returns:
        str: Binding name.
    """
    name = "_".join(tokens)
    if name in RESERVED_WORDS:
        return f"{name}{RESERVED_SUFFIX}"
    return name

# ==============================================================================
# PUBLIC API: TEMPLATES
# ==============================================================================

def has_params(route_path: str) -> bool:
    return bool(extract_route_params(route_path))


def param_bindings(params: Sequence[str]) -> List[str]:
    """
    Local variable names for route parameters.

    Names are sanitized, reserved words take the '_route' suffix and
    clashes between two parameters get a numeric suffix.

    Args:
        params: Raw parameter names, e.g. ['post-id'].

    Returns:
        List[str]: Binding names, e.g. ['postId'].
    """
    bindings: List[str] = []
    for param in params:
        name = sanitize_identifier(param)
        if name in RESERVED_WORDS:
            name = f"{name}{RESERVED_SUFFIX}"
        candidate, n = name, 2
        while candidate in bindings:
            candidate = f"{name}_{n}"
            n += 1
        bindings.append(candidate)
    return bindings


def build_template(route_path: str) -> Optional[RouteTemplate]:
    """
    Build the template descriptor of a parameterized path.

    Args:
        route_path: Path with bracket placeholders.

    Returns:
        Optional[RouteTemplate]: Descriptor, or None for static paths.
    """
    params = extract_route_params(route_path)
    if not params:
        return None

    bindings = param_bindings(params)
    slots = iter(bindings)
    template_parts: List[str] = []
    example_parts: List[str] = []
    for part in route_path.split("/"):
        seg = classify_segment(part) if part else None
        if seg is not None and seg.is_dynamic and seg.param_name:
            template_parts.append("${" + next(slots) + "}")
            example_parts.append(f"<{seg.param_name}>")
        else:
            template_parts.append(part)
            example_parts.append(part)

    return RouteTemplate(
        path=route_path,
        params=params,
        bindings=bindings,
        template="/".join(template_parts),
        example="/".join(example_parts),
    )

# ==============================================================================
# PUBLIC API: PREFIX STRIPPING
# ==============================================================================

def strip_path_prefixes(route_path: str, rules: Sequence[str]) -> str:
    """
    Apply the first matching strip rule to a path.

    A rule wrapped in '//' (e.g. '//^\\/site\\/[^/]+//') is a regex anchored
    at the start of the path; any other rule is a literal prefix. The
    result always starts with '/'.

    Args:
        route_path: URL path.
        rules: Strip rules in priority order.

    Returns:
        str: Stripped path, or the input when no rule matches.
    """
    for rule in rules:
        if not rule:
            continue
        if _is_regex_rule(rule):
            pattern = rule[len(_REGEX_RULE_DELIMITER):-len(_REGEX_RULE_DELIMITER)]
            try:
                match = re.match(f"^(?:{pattern})", route_path)
            except re.error as e:
                logger.warning(f"Ignoring invalid strip pattern '{rule}': {e}")
                continue
            if match:
                return _anchor(route_path[match.end():])
        elif route_path.startswith(rule):
            return _anchor(route_path[len(rule):])
    return route_path


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _is_regex_rule(rule: str) -> bool:
    d = _REGEX_RULE_DELIMITER
    return rule.startswith(d) and rule.endswith(d) and len(rule) > 2 * len(d)


def _anchor(path: str) -> str:
    return path if path.startswith("/") else f"/{path}"
