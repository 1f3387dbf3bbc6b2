"""
Utility classification for the twfuse merge core.

Maps a ClassToken's base elements to the collision id of the CSS property group
it sets. The static rule table is evaluated longest head first, so ``pt-4`` is
matched by the ``pt`` rule before ``p`` is considered; rules sharing a head are
tried in declaration order. Anything the table does not cover has no collision
id and passes through the merge untouched.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from .arbitrary import (
    ArbitraryValue,
    is_absolute_size,
    is_any,
    is_color,
    is_image,
    is_length,
    is_number,
    is_percentage,
    is_position,
    is_shadow,
    is_url,
)
from .core import ClassToken

logger = logging.getLogger(__name__)

Matcher = Callable[[str, Optional[ArbitraryValue]], bool]
CollisionIdFn = Callable[[ClassToken], Optional[str]]

KIND_PREDICATES = {
    "length": is_length,
    "number": is_number,
    "percentage": is_percentage,
    "color": is_color,
    "image": is_image,
    "url": is_url,
    "shadow": is_shadow,
    "position": is_position,
    "absolute-size": is_absolute_size,
    "any": is_any,
}
HINT_ALIASES = {
    "size": "length",
    "percentage": "length",
    "line-width": "length",
    "integer": "number",
}


# === Value matchers ===


def _value(rest: str, arb: Optional[ArbitraryValue]) -> bool:
    return bool(rest) or arb is not None


def _bare_or_value(rest: str, arb: Optional[ArbitraryValue]) -> bool:
    return True


def one_of(*words: str) -> Matcher:
    """Literal suffixes; ``""`` allows the bare utility."""
    allowed = frozenset(words)

    def match(rest: str, arb: Optional[ArbitraryValue]) -> bool:
        return arb is None and rest in allowed

    return match


def arbitrary(*kinds: str) -> Matcher:
    """Bracket payloads whose type hint, or sniffed shape, is one of ``kinds``."""

    def match(rest: str, arb: Optional[ArbitraryValue]) -> bool:
        if rest or arb is None:
            return False
        hint = arb.hint
        if hint is not None:
            return HINT_ALIASES.get(hint, hint) in kinds
        return any(KIND_PREDICATES[kind](arb.value) for kind in kinds)

    return match


def hinted(*hints: str) -> Matcher:
    """Bracket payloads carrying one of the given explicit type hints."""

    def match(rest: str, arb: Optional[ArbitraryValue]) -> bool:
        return not rest and arb is not None and arb.hint in hints

    return match


def suffix(predicate: Callable[[str], bool]) -> Matcher:
    """Plain (non-bracket) suffixes accepted by ``predicate``."""

    def match(rest: str, arb: Optional[ArbitraryValue]) -> bool:
        return arb is None and bool(rest) and predicate(rest)

    return match


def modified(matcher: Matcher) -> Matcher:
    """Apply ``matcher`` to a plain suffix with any ``/modifier`` removed (``sm/6``)."""

    def match(rest: str, arb: Optional[ArbitraryValue]) -> bool:
        return matcher(rest.split("/", 1)[0], arb)

    return match


def either(*matchers: Matcher) -> Matcher:
    def match(rest: str, arb: Optional[ArbitraryValue]) -> bool:
        return any(m(rest, arb) for m in matchers)

    return match


VALUE: Matcher = _value
BARE_OR_VALUE: Matcher = _bare_or_value


@dataclass(frozen=True)
class Rule:
    """Maps utilities starting with ``head`` whose remainder passes ``matcher``."""

    head: Tuple[str, ...]
    collision_id: str
    matcher: Matcher = VALUE

    def matches(self, elements: Tuple[str, ...], arb: Optional[ArbitraryValue]) -> bool:
        n = len(self.head)
        if elements[:n] != self.head:
            return False
        return self.matcher("-".join(elements[n:]), arb)


def rule(head: str, collision_id: str, matcher: Matcher = VALUE) -> Rule:
    return Rule(tuple(head.split("-")) if head else (), collision_id, matcher)


# === Value vocabularies ===

DISPLAY = (
    "block", "inline-block", "inline", "flex", "inline-flex", "table",
    "inline-table", "table-caption", "table-cell", "table-column",
    "table-column-group", "table-footer-group", "table-header-group",
    "table-row-group", "table-row", "flow-root", "grid", "inline-grid",
    "contents", "list-item", "hidden",
)
FONT_SIZES = (
    "xs", "sm", "base", "lg", "xl", "2xl", "3xl", "4xl", "5xl", "6xl", "7xl",
    "8xl", "9xl",
)
FONT_WEIGHTS = (
    "thin", "extralight", "light", "normal", "medium", "semibold", "bold",
    "extrabold", "black",
)
ALIGNMENTS = ("left", "center", "right", "justify", "start", "end")
BORDER_STYLES = ("solid", "dashed", "dotted", "double", "hidden", "none")
BORDER_WIDTHS = ("", "0", "2", "4", "8")
BG_POSITIONS = (
    "bottom", "center", "left", "left-bottom", "left-top", "right",
    "right-bottom", "right-top", "top",
)
BG_REPEATS = (
    "repeat", "no-repeat", "repeat-x", "repeat-y", "repeat-round",
    "repeat-space",
)
SHADOW_SIZES = ("", "sm", "md", "lg", "xl", "2xl", "inner", "none")
RING_WIDTHS = ("", "0", "1", "2", "4", "8")
FLEX_DIRECTIONS = ("row", "row-reverse", "col", "col-reverse")
ALIGN_CONTENT = (
    "normal", "center", "start", "end", "between", "around", "evenly",
    "baseline", "stretch",
)

BORDER_WIDTH = either(one_of(*BORDER_WIDTHS), arbitrary("length"))
RING_WIDTH = either(one_of(*RING_WIDTHS), arbitrary("length"))
GRADIENT_POSITION = either(suffix(is_percentage), arbitrary("percentage"))

# fmt: off
RULES: List[Rule] = [
    # Layout
    rule("aspect", "aspect-ratio"),
    rule("container", "container", one_of("")),
    rule("columns", "columns"),
    rule("break-after", "break-after"),
    rule("break-before", "break-before"),
    rule("break-inside", "break-inside"),
    rule("box-decoration", "box-decoration-break"),
    rule("box", "box-sizing", one_of("border", "content")),
    rule("", "display", one_of(*DISPLAY)),
    rule("float", "float"),
    rule("clear", "clear"),
    rule("", "isolation", one_of("isolate")),
    rule("isolation", "isolation", one_of("auto")),
    rule("object", "object-fit", one_of("contain", "cover", "fill", "none", "scale-down")),
    rule("object", "object-position"),
    rule("overflow-x", "overflow-x"),
    rule("overflow-y", "overflow-y"),
    rule("overflow", "overflow"),
    rule("overscroll-x", "overscroll-behavior-x"),
    rule("overscroll-y", "overscroll-behavior-y"),
    rule("overscroll", "overscroll-behavior"),
    rule("", "position", one_of("static", "fixed", "absolute", "relative", "sticky")),
    rule("inset-x", "inset-x"),
    rule("inset-y", "inset-y"),
    rule("inset", "inset"),
    rule("start", "start"),
    rule("end", "end"),
    rule("top", "top"),
    rule("right", "right"),
    rule("bottom", "bottom"),
    rule("left", "left"),
    rule("", "visibility", one_of("visible", "invisible", "collapse")),
    rule("z", "z-index"),

    # Flexbox & Grid
    rule("basis", "flex-basis"),
    rule("flex", "flex-direction", one_of(*FLEX_DIRECTIONS)),
    rule("flex", "flex-wrap", one_of("wrap", "wrap-reverse", "nowrap")),
    rule("flex", "flex"),
    rule("grow", "flex-grow", BARE_OR_VALUE),
    rule("shrink", "flex-shrink", BARE_OR_VALUE),
    rule("order", "order"),
    rule("grid-cols", "grid-template-columns"),
    rule("col-start", "grid-column-start"),
    rule("col-end", "grid-column-end"),
    rule("col", "grid-column"),
    rule("grid-rows", "grid-template-rows"),
    rule("row-start", "grid-row-start"),
    rule("row-end", "grid-row-end"),
    rule("row", "grid-row"),
    rule("grid-flow", "grid-auto-flow"),
    rule("auto-cols", "grid-auto-columns"),
    rule("auto-rows", "grid-auto-rows"),
    rule("gap-x", "gap-x"),
    rule("gap-y", "gap-y"),
    rule("gap", "gap"),
    rule("justify-items", "justify-items"),
    rule("justify-self", "justify-self"),
    rule("justify", "justify-content"),
    rule("content", "align-content", one_of(*ALIGN_CONTENT)),
    rule("content", "content"),
    rule("items", "align-items"),
    rule("self", "align-self"),
    rule("place-content", "place-content"),
    rule("place-items", "place-items"),
    rule("place-self", "place-self"),

    # Spacing
    rule("p", "padding"),
    rule("px", "padding-x"),
    rule("py", "padding-y"),
    rule("ps", "padding-start"),
    rule("pe", "padding-end"),
    rule("pt", "padding-top"),
    rule("pr", "padding-right"),
    rule("pb", "padding-bottom"),
    rule("pl", "padding-left"),
    rule("m", "margin"),
    rule("mx", "margin-x"),
    rule("my", "margin-y"),
    rule("ms", "margin-start"),
    rule("me", "margin-end"),
    rule("mt", "margin-top"),
    rule("mr", "margin-right"),
    rule("mb", "margin-bottom"),
    rule("ml", "margin-left"),
    rule("space-x", "space-x-reverse", one_of("reverse")),
    rule("space-x", "space-x"),
    rule("space-y", "space-y-reverse", one_of("reverse")),
    rule("space-y", "space-y"),

    # Sizing
    rule("size", "size"),
    rule("w", "width"),
    rule("min-w", "min-width"),
    rule("max-w", "max-width"),
    rule("h", "height"),
    rule("min-h", "min-height"),
    rule("max-h", "max-height"),

    # Typography
    rule("font", "font-family", one_of("sans", "serif", "mono")),
    rule("font", "font-weight", either(one_of(*FONT_WEIGHTS), arbitrary("number"))),
    rule("font", "font-family"),
    rule("text", "font-size", either(modified(one_of(*FONT_SIZES)), arbitrary("length", "absolute-size"))),
    rule("text-opacity", "text-opacity"),
    rule("text", "text-align", one_of(*ALIGNMENTS)),
    rule("text", "text-overflow", one_of("ellipsis", "clip")),
    rule("text", "text-wrap", one_of("wrap", "nowrap", "balance", "pretty")),
    rule("text", "text-color"),
    rule("", "font-smoothing", one_of("antialiased", "subpixel-antialiased")),
    rule("", "font-style", one_of("italic", "not-italic")),
    rule("", "fvn-normal", one_of("normal-nums")),
    rule("", "fvn-ordinal", one_of("ordinal")),
    rule("", "fvn-slashed-zero", one_of("slashed-zero")),
    rule("", "fvn-figure", one_of("lining-nums", "oldstyle-nums")),
    rule("", "fvn-spacing", one_of("proportional-nums", "tabular-nums")),
    rule("", "fvn-fraction", one_of("diagonal-fractions", "stacked-fractions")),
    rule("tracking", "letter-spacing"),
    rule("line-clamp", "line-clamp"),
    rule("leading", "line-height"),
    rule("list-image", "list-style-image"),
    rule("list", "list-style-position", one_of("inside", "outside")),
    rule("list", "list-style-type"),
    rule("", "text-decoration", one_of("underline", "overline", "line-through", "no-underline")),
    rule("decoration", "text-decoration-style", one_of("solid", "double", "dotted", "dashed", "wavy")),
    rule(
        "decoration",
        "text-decoration-thickness",
        either(one_of("auto", "from-font", "0", "1", "2", "4", "8"), arbitrary("length")),
    ),
    rule("decoration", "text-decoration-color"),
    rule("underline-offset", "underline-offset"),
    rule("", "text-transform", one_of("uppercase", "lowercase", "capitalize", "normal-case")),
    rule("", "text-overflow", one_of("truncate")),
    rule("indent", "text-indent"),
    rule("align", "vertical-align"),
    rule("whitespace", "whitespace"),
    rule("break", "word-break", one_of("normal", "words", "all", "keep")),
    rule("hyphens", "hyphens"),

    # Backgrounds
    rule("bg-opacity", "background-opacity"),
    rule("bg", "background-attachment", one_of("fixed", "local", "scroll")),
    rule("bg-clip", "background-clip"),
    rule("bg-origin", "background-origin"),
    rule("bg-blend", "background-blend-mode"),
    rule("bg", "background-repeat", one_of(*BG_REPEATS)),
    rule("bg", "background-size", either(one_of("auto", "cover", "contain"), hinted("length", "size", "percentage"))),
    rule("bg", "background-position", either(one_of(*BG_POSITIONS), hinted("position"), arbitrary("position"))),
    rule("bg-gradient-to", "background-image"),
    rule("bg", "background-image", either(one_of("none"), arbitrary("image", "url"))),
    rule("bg", "background-color"),
    rule("from", "gradient-from-position", GRADIENT_POSITION),
    rule("via", "gradient-via-position", GRADIENT_POSITION),
    rule("to", "gradient-to-position", GRADIENT_POSITION),
    rule("from", "gradient-from"),
    rule("via", "gradient-via"),
    rule("to", "gradient-to"),

    # Borders
    rule("rounded-ss", "border-radius-start-start", BARE_OR_VALUE),
    rule("rounded-se", "border-radius-start-end", BARE_OR_VALUE),
    rule("rounded-ee", "border-radius-end-end", BARE_OR_VALUE),
    rule("rounded-es", "border-radius-end-start", BARE_OR_VALUE),
    rule("rounded-tl", "border-radius-top-left", BARE_OR_VALUE),
    rule("rounded-tr", "border-radius-top-right", BARE_OR_VALUE),
    rule("rounded-br", "border-radius-bottom-right", BARE_OR_VALUE),
    rule("rounded-bl", "border-radius-bottom-left", BARE_OR_VALUE),
    rule("rounded-s", "border-radius-start", BARE_OR_VALUE),
    rule("rounded-e", "border-radius-end", BARE_OR_VALUE),
    rule("rounded-t", "border-radius-top", BARE_OR_VALUE),
    rule("rounded-r", "border-radius-right", BARE_OR_VALUE),
    rule("rounded-b", "border-radius-bottom", BARE_OR_VALUE),
    rule("rounded-l", "border-radius-left", BARE_OR_VALUE),
    rule("rounded", "border-radius", BARE_OR_VALUE),
    rule("border-spacing-x", "border-spacing-x"),
    rule("border-spacing-y", "border-spacing-y"),
    rule("border-spacing", "border-spacing"),
    rule("border-x", "border-width-x", BORDER_WIDTH),
    rule("border-y", "border-width-y", BORDER_WIDTH),
    rule("border-s", "border-width-start", BORDER_WIDTH),
    rule("border-e", "border-width-end", BORDER_WIDTH),
    rule("border-t", "border-width-top", BORDER_WIDTH),
    rule("border-r", "border-width-right", BORDER_WIDTH),
    rule("border-b", "border-width-bottom", BORDER_WIDTH),
    rule("border-l", "border-width-left", BORDER_WIDTH),
    rule("border-x", "border-color-x"),
    rule("border-y", "border-color-y"),
    rule("border-s", "border-color-start"),
    rule("border-e", "border-color-end"),
    rule("border-t", "border-color-top"),
    rule("border-r", "border-color-right"),
    rule("border-b", "border-color-bottom"),
    rule("border-l", "border-color-left"),
    rule("border-opacity", "border-opacity"),
    rule("border", "border-style", one_of(*BORDER_STYLES)),
    rule("border", "border-collapse", one_of("collapse", "separate")),
    rule("border", "border-width", BORDER_WIDTH),
    rule("border", "border-color"),
    rule("divide-x", "divide-x-reverse", one_of("reverse")),
    rule("divide-x", "divide-x", BARE_OR_VALUE),
    rule("divide-y", "divide-y-reverse", one_of("reverse")),
    rule("divide-y", "divide-y", BARE_OR_VALUE),
    rule("divide-opacity", "divide-opacity"),
    rule("divide", "divide-style", one_of("solid", "dashed", "dotted", "double", "none")),
    rule("divide", "divide-color"),
    rule("outline-offset", "outline-offset"),
    rule("outline", "outline-style", one_of("", "dashed", "dotted", "double", "none")),
    rule("outline", "outline-width", either(one_of("0", "1", "2", "4", "8"), arbitrary("length"))),
    rule("outline", "outline-color"),
    rule("ring-offset", "ring-offset-width", RING_WIDTH),
    rule("ring-offset", "ring-offset-color"),
    rule("ring-opacity", "ring-opacity"),
    rule("ring", "ring-inset", one_of("inset")),
    rule("ring", "ring-width", RING_WIDTH),
    rule("ring", "ring-color"),

    # Effects
    rule("shadow", "box-shadow", either(one_of(*SHADOW_SIZES), arbitrary("shadow"))),
    rule("shadow", "box-shadow-color"),
    rule("opacity", "opacity"),
    rule("mix-blend", "mix-blend-mode"),

    # Filters
    rule("filter", "filter", one_of("", "none")),
    rule("blur", "blur", BARE_OR_VALUE),
    rule("brightness", "brightness"),
    rule("contrast", "contrast"),
    rule("drop-shadow", "drop-shadow", BARE_OR_VALUE),
    rule("grayscale", "grayscale", BARE_OR_VALUE),
    rule("hue-rotate", "hue-rotate"),
    rule("invert", "invert", BARE_OR_VALUE),
    rule("saturate", "saturate"),
    rule("sepia", "sepia", BARE_OR_VALUE),
    rule("backdrop-filter", "backdrop-filter", one_of("", "none")),
    rule("backdrop-blur", "backdrop-blur", BARE_OR_VALUE),
    rule("backdrop-brightness", "backdrop-brightness"),
    rule("backdrop-contrast", "backdrop-contrast"),
    rule("backdrop-grayscale", "backdrop-grayscale", BARE_OR_VALUE),
    rule("backdrop-hue-rotate", "backdrop-hue-rotate"),
    rule("backdrop-invert", "backdrop-invert", BARE_OR_VALUE),
    rule("backdrop-opacity", "backdrop-opacity"),
    rule("backdrop-saturate", "backdrop-saturate"),
    rule("backdrop-sepia", "backdrop-sepia", BARE_OR_VALUE),

    # Tables
    rule("table", "table-layout", one_of("auto", "fixed")),
    rule("caption", "caption-side"),

    # Transitions & Animation
    rule("transition", "transition", BARE_OR_VALUE),
    rule("duration", "duration"),
    rule("ease", "ease"),
    rule("delay", "delay"),
    rule("animate", "animate"),

    # Transforms
    rule("transform", "transform", one_of("", "gpu", "cpu", "none")),
    rule("scale-x", "scale-x"),
    rule("scale-y", "scale-y"),
    rule("scale", "scale"),
    rule("rotate", "rotate"),
    rule("translate-x", "translate-x"),
    rule("translate-y", "translate-y"),
    rule("skew-x", "skew-x"),
    rule("skew-y", "skew-y"),
    rule("origin", "transform-origin"),

    # Interactivity
    rule("accent", "accent-color"),
    rule("appearance", "appearance"),
    rule("cursor", "cursor"),
    rule("caret", "caret-color"),
    rule("pointer-events", "pointer-events"),
    rule("resize", "resize", one_of("", "none", "x", "y")),
    rule("scroll", "scroll-behavior", one_of("auto", "smooth")),
    rule("scroll-m", "scroll-margin"),
    rule("scroll-mx", "scroll-margin-x"),
    rule("scroll-my", "scroll-margin-y"),
    rule("scroll-ms", "scroll-margin-start"),
    rule("scroll-me", "scroll-margin-end"),
    rule("scroll-mt", "scroll-margin-top"),
    rule("scroll-mr", "scroll-margin-right"),
    rule("scroll-mb", "scroll-margin-bottom"),
    rule("scroll-ml", "scroll-margin-left"),
    rule("scroll-p", "scroll-padding"),
    rule("scroll-px", "scroll-padding-x"),
    rule("scroll-py", "scroll-padding-y"),
    rule("scroll-ps", "scroll-padding-start"),
    rule("scroll-pe", "scroll-padding-end"),
    rule("scroll-pt", "scroll-padding-top"),
    rule("scroll-pr", "scroll-padding-right"),
    rule("scroll-pb", "scroll-padding-bottom"),
    rule("scroll-pl", "scroll-padding-left"),
    rule("snap", "snap-align", one_of("start", "end", "center", "align-none")),
    rule("snap", "snap-stop", one_of("normal", "always")),
    rule("snap", "snap-type", one_of("none", "x", "y", "both")),
    rule("snap", "snap-strictness", one_of("mandatory", "proximity")),
    rule("touch", "touch", one_of("auto", "none", "manipulation")),
    rule("touch", "touch-x", one_of("pan-x", "pan-left", "pan-right")),
    rule("touch", "touch-y", one_of("pan-y", "pan-up", "pan-down")),
    rule("touch", "touch-pz", one_of("pinch-zoom")),
    rule("select", "user-select"),
    rule("will-change", "will-change"),

    # SVG
    rule("fill", "fill"),
    rule("stroke", "stroke-width", either(one_of("0", "1", "2"), arbitrary("length", "number"))),
    rule("stroke", "stroke"),

    # Accessibility
    rule("", "sr", one_of("sr-only", "not-sr-only")),
]
# fmt: on


def _build_index(rules: List[Rule]) -> Tuple[Dict[str, List[Rule]], List[Rule]]:
    """Group rules by their first head element, longest head first within a group."""
    by_first: Dict[str, List[Rule]] = {}
    root: List[Rule] = []
    for r in rules:
        if r.head:
            by_first.setdefault(r.head[0], []).append(r)
        else:
            root.append(r)
    for group in by_first.values():
        # sort is stable, so declaration order breaks ties between equal heads
        group.sort(key=lambda r: -len(r.head))
    return by_first, root


_RULES_BY_FIRST, _ROOT_RULES = _build_index(RULES)


def get_collision_id(token: ClassToken) -> Optional[str]:
    """
    Look up the collision id of a parsed utility in the static rule table.

    Args:
        token: Parsed class token

    Returns:
        Collision id, or None when the utility is not covered by the table
    """
    elements = token.elements
    arb = token.arbitrary
    candidates = _RULES_BY_FIRST.get(elements[0], []) if elements else []
    for r in candidates:
        if r.matches(elements, arb):
            return r.collision_id
    for r in _ROOT_RULES:
        if r.matches(elements, arb):
            return r.collision_id
    return None


def classify(
    token: ClassToken, collision_id_fn: Optional[CollisionIdFn] = None
) -> Optional[str]:
    """
    Resolve a token's collision id, consulting ``collision_id_fn`` before the table.

    The static table is used whenever the override returns None.
    """
    if collision_id_fn is not None:
        collision_id = collision_id_fn(token)
        if collision_id is not None:
            return collision_id
    return get_collision_id(token)
