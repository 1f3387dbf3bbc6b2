"""
Implication table for the twfuse merge core.

Maps a broad collision id (a CSS shorthand) to the narrower ids it overrides.
Each entry lists its complete set; the merge engine inserts exactly these ids
and does not walk the table transitively.
"""

from typing import Callable, Dict, FrozenSet, Iterable, Optional

CollisionsFn = Callable[[str], Optional[Iterable[str]]]

SIDES = ("start", "end", "top", "right", "bottom", "left")


def _box(prefix: str) -> Dict[str, FrozenSet[str]]:
    """Entries for a four-sided property with axis shorthands (padding, margin, ...)."""
    return {
        prefix: frozenset(
            [f"{prefix}-x", f"{prefix}-y"] + [f"{prefix}-{side}" for side in SIDES]
        ),
        f"{prefix}-x": frozenset([f"{prefix}-right", f"{prefix}-left"]),
        f"{prefix}-y": frozenset([f"{prefix}-top", f"{prefix}-bottom"]),
    }


FVN = ("fvn-ordinal", "fvn-slashed-zero", "fvn-figure", "fvn-spacing", "fvn-fraction")

COLLISIONS: Dict[str, FrozenSet[str]] = {
    "overflow": frozenset(["overflow-x", "overflow-y"]),
    "overscroll-behavior": frozenset(
        ["overscroll-behavior-x", "overscroll-behavior-y"]
    ),
    "inset": frozenset(
        ["inset-x", "inset-y", "start", "end", "top", "right", "bottom", "left"]
    ),
    "inset-x": frozenset(["right", "left"]),
    "inset-y": frozenset(["top", "bottom"]),
    "flex": frozenset(["flex-basis", "flex-grow", "flex-shrink"]),
    "gap": frozenset(["gap-x", "gap-y"]),
    **_box("padding"),
    **_box("margin"),
    **_box("scroll-margin"),
    **_box("scroll-padding"),
    "size": frozenset(["width", "height"]),
    "font-size": frozenset(["line-height"]),
    "fvn-normal": frozenset(FVN),
    **{fvn: frozenset(["fvn-normal"]) for fvn in FVN},
    "line-clamp": frozenset(["display", "overflow", "overflow-x", "overflow-y"]),
    "border-radius": frozenset(
        [
            "border-radius-start",
            "border-radius-end",
            "border-radius-top",
            "border-radius-right",
            "border-radius-bottom",
            "border-radius-left",
            "border-radius-start-start",
            "border-radius-start-end",
            "border-radius-end-end",
            "border-radius-end-start",
            "border-radius-top-left",
            "border-radius-top-right",
            "border-radius-bottom-right",
            "border-radius-bottom-left",
        ]
    ),
    "border-radius-start": frozenset(
        ["border-radius-start-start", "border-radius-end-start"]
    ),
    "border-radius-end": frozenset(["border-radius-start-end", "border-radius-end-end"]),
    "border-radius-top": frozenset(
        ["border-radius-top-left", "border-radius-top-right"]
    ),
    "border-radius-right": frozenset(
        ["border-radius-top-right", "border-radius-bottom-right"]
    ),
    "border-radius-bottom": frozenset(
        ["border-radius-bottom-right", "border-radius-bottom-left"]
    ),
    "border-radius-left": frozenset(
        ["border-radius-top-left", "border-radius-bottom-left"]
    ),
    "border-spacing": frozenset(["border-spacing-x", "border-spacing-y"]),
    **_box("border-width"),
    **_box("border-color"),
    "touch": frozenset(["touch-x", "touch-y", "touch-pz"]),
    "touch-x": frozenset(["touch"]),
    "touch-y": frozenset(["touch"]),
    "touch-pz": frozenset(["touch"]),
}


def get_collisions(collision_id: str) -> Optional[FrozenSet[str]]:
    """Return the ids overridden by ``collision_id``, or None if it implies nothing."""
    return COLLISIONS.get(collision_id)


def implied_collisions(
    collision_id: str, collisions_fn: Optional[CollisionsFn] = None
) -> FrozenSet[str]:
    """
    Resolve the implication set of ``collision_id``, consulting ``collisions_fn`` first.

    The static table is used whenever the override returns None.
    """
    if collisions_fn is not None:
        overridden = collisions_fn(collision_id)
        if overridden is not None:
            return frozenset(overridden)
    return get_collisions(collision_id) or frozenset()
