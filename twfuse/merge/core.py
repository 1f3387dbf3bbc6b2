"""
Core data structures for the twfuse merge core.

Contains the parsed class token, the collision scope keys, the merge options
and the process-wide, write-once options cell.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from .arbitrary import ArbitraryValue

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeOptions:
    """Prefix and variant separator used when tokenizing class strings."""

    prefix: str = ""
    separator: str = ":"

    def __post_init__(self):
        if not self.separator:
            raise ValueError("Variant separator must not be empty")


DEFAULT_OPTIONS = MergeOptions()


@dataclass(frozen=True)
class ClassToken:
    """A single utility class split into its structural parts."""

    source: str
    variants: Tuple[str, ...] = ()
    important: bool = False
    negative: bool = False
    elements: Tuple[str, ...] = ()
    arbitrary: Optional[ArbitraryValue] = None

    @property
    def utility(self) -> str:
        """The base utility without variants, markers or prefix (e.g. ``p-4``)."""
        base = "-".join(self.elements)
        if self.arbitrary is not None:
            bracket = f"[{self.arbitrary.inner}]"
            base = f"{base}-{bracket}" if base else bracket
        return base


@dataclass(frozen=True)
class DefaultCollision:
    """A claim on a property group inside one variant/importance scope."""

    variants: Tuple[str, ...]
    important: bool
    collision_id: str


@dataclass(frozen=True)
class ArbitraryCollision:
    """A claim on an arbitrary ``[label:value]`` property (exact label match only)."""

    variants: Tuple[str, ...]
    important: bool
    label: str


Collision = Union[DefaultCollision, ArbitraryCollision]


class OptionsCell:
    """
    Single-assignment holder for the process-wide merge options.

    The first ``set`` wins; later calls are ignored and report False.
    """

    def __init__(self):
        self._value: Optional[MergeOptions] = None
        self._lock = threading.Lock()

    def set(self, options: MergeOptions) -> bool:
        with self._lock:
            if self._value is not None:
                logger.debug("Merge options already set, ignoring %s", options)
                return False
            self._value = options
            logger.debug("Merge options set to %s", options)
            return True

    def get(self) -> MergeOptions:
        value = self._value
        return value if value is not None else DEFAULT_OPTIONS

    @property
    def is_set(self) -> bool:
        return self._value is not None


_merge_options = OptionsCell()


def set_merge_options(options: MergeOptions) -> bool:
    """
    Set the process-wide merge options used by ``merge`` and rendered components.

    Can only be set once; subsequent calls are ignored.

    Returns:
        True if the options took effect, False if they were already set
    """
    return _merge_options.set(options)


def get_merge_options() -> MergeOptions:
    return _merge_options.get()
