from __future__ import annotations

"""
Route Segment Grammar.

Classifies individual path segments into their structural role and derives
the route pattern, parameter lists and URL string from a full segment list.
All functions here are pure and never touch the filesystem.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from next_introspect.domain.constants import (
    INTERCEPTING_MARKERS,
    PATTERN_CATCH_ALL,
    PATTERN_DYNAMIC,
    PATTERN_OPTIONAL_CATCH_ALL,
    PATTERN_STATIC,
    URL_HIDDEN_SEGMENTS,
)
from next_introspect.domain.models import RouteSegment


@dataclass(frozen=True)
class SegmentAnalysis:
    """
    Aggregate view of a route's segment list.

    Attributes:
        pattern: Dominant pattern across URL-contributing segments.
        dynamic_segments: Plain dynamic parameter names in order.
        catch_all_segment: Catch-all parameter name, if any.
    """
    pattern: str
    dynamic_segments: List[str]
    catch_all_segment: Optional[str]


# ==============================================================================
# PUBLIC API
# ==============================================================================

def classify_segment(segment: str) -> RouteSegment:
    """
    Classify one path segment. Total: unknown shapes are static.

    Intercepting markers share the parenthesis syntax with route groups,
    so they are tested first.

    Args:
        segment: Raw directory or file stem.

    Returns:
        RouteSegment: Immutable classification.
    """
    if segment.startswith("(") and segment.endswith(")") and len(segment) >= 2:
        inner = segment[1:-1]
        if inner in INTERCEPTING_MARKERS:
            return RouteSegment(name=segment, is_intercepting=True)
        return RouteSegment(name=segment, is_route_group=True)

    if segment.startswith("@"):
        return RouteSegment(name=segment, is_parallel=True)

    if segment.startswith("[") and segment.endswith("]") and len(segment) >= 2:
        inner = segment[1:-1]
        if inner.startswith("[...") and inner.endswith("]"):
            return RouteSegment(
                name=segment,
                is_dynamic=True,
                is_catch_all=True,
                is_optional_catch_all=True,
                param_name=inner[4:-1],
            )
        if inner.startswith("..."):
            return RouteSegment(
                name=segment,
                is_dynamic=True,
                is_catch_all=True,
                param_name=inner[3:],
            )
        return RouteSegment(name=segment, is_dynamic=True, param_name=inner)

    return RouteSegment(name=segment)


def classify_path(route_path: str, *, allow_markers: bool = True) -> List[RouteSegment]:
    """
    Split a '/' separated path and classify every non-empty segment.

    Args:
        route_path: Directory path relative to a route root.
        allow_markers: When False, group/intercepting/parallel syntax is
            treated as a plain static name (flat-file family).

    Returns:
        List[RouteSegment]: Classified segments in path order.
    """
    segments: List[RouteSegment] = []
    for part in route_path.replace("\\", "/").split("/"):
        if not part:
            continue
        seg = classify_segment(part)
        if not allow_markers and not seg.contributes_to_url:
            seg = RouteSegment(name=part)
        segments.append(seg)
    return segments


def analyze_segments(segments: Sequence[RouteSegment]) -> SegmentAnalysis:
    """
    Derive pattern and parameter names from URL-contributing segments.

    Precedence: optional-catch-all > catch-all > dynamic > static.

    Args:
        segments: Classified segments of one route.

    Returns:
        SegmentAnalysis: Pattern, dynamic names and catch-all name.
    """
    dynamic_segments: List[str] = []
    catch_all: Optional[str] = None
    has_optional = False

    for seg in segments:
        if not seg.contributes_to_url or not seg.is_dynamic:
            continue
        if seg.is_optional_catch_all:
            has_optional = True
            catch_all = seg.param_name
        elif seg.is_catch_all:
            catch_all = seg.param_name
        elif seg.param_name is not None:
            dynamic_segments.append(seg.param_name)

    if has_optional:
        pattern = PATTERN_OPTIONAL_CATCH_ALL
    elif catch_all is not None:
        pattern = PATTERN_CATCH_ALL
    elif dynamic_segments:
        pattern = PATTERN_DYNAMIC
    else:
        pattern = PATTERN_STATIC

    return SegmentAnalysis(
        pattern=pattern,
        dynamic_segments=dynamic_segments,
        catch_all_segment=catch_all,
    )


def format_route_path(segments: Sequence[RouteSegment], *, hide_special: bool = True) -> str:
    """
    Build the URL string from classified segments.

    Non-URL segments are skipped, as are static names that denote special
    files when hide_special is set. Dynamic segments are re-emitted in
    canonical bracket form.

    Args:
        segments: Classified segments of one route.
        hide_special: Drop static "page" and "route" segments.

    Returns:
        str: URL path starting with '/'; the root is exactly '/'.
    """
    parts: List[str] = []
    for seg in segments:
        if not seg.contributes_to_url:
            continue
        if seg.is_optional_catch_all:
            parts.append(f"[[...{seg.param_name}]]")
        elif seg.is_catch_all:
            parts.append(f"[...{seg.param_name}]")
        elif seg.is_dynamic:
            parts.append(f"[{seg.param_name}]")
        elif hide_special and seg.name in URL_HIDDEN_SEGMENTS:
            continue
        else:
            parts.append(seg.name)
    return "/" + "/".join(parts)


def extract_route_params(route_path: str) -> List[str]:
    """
    List parameter names of a rendered URL path in order of appearance.

    Args:
        route_path: URL path such as '/blog/[slug]/[[...rest]]'.

    Returns:
        List[str]: Parameter names without bracket syntax.
    """
    params: List[str] = []
    for seg in classify_path(route_path, allow_markers=False):
        if seg.is_dynamic and seg.param_name:
            params.append(seg.param_name)
    return params
