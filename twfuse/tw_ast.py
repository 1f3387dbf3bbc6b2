from dataclasses import dataclass, field
from typing import Dict, Optional

# Theme used for classes declared without an explicit @theme
BASE_THEME = "base"

# Names that cannot be used as component fields (they are rendering keywords)
RESERVED_FIELDS = {"theme", "override"}


class VariantDefinitionError(ValueError):
    """Raised for invalid variant/component definitions or unknown choices."""


# === Class Nodes ===


@dataclass(frozen=True)
class ThemeClass:
    """Represents a class string attached to a theme (``base`` when unnamed)."""

    theme: str
    classes: str


def classes_for_theme(themes: tuple, theme: str) -> str:
    """Concatenate every class string declared for ``theme``, in declaration order."""
    return " ".join(t.classes for t in themes if t.theme == theme and t.classes)


# === Top-Level Nodes ===


@dataclass(frozen=True)
class Version:
    """Represents the DSL version."""

    value: str


@dataclass(frozen=True)
class VariantOption:
    """Represents one choice of a variant (e.g. ``Sm "h-8 px-3"``)."""

    name: str
    themes: tuple[ThemeClass, ...] = field(default_factory=tuple)
    default: bool = False


@dataclass(frozen=True)
class VariantDef:
    """Represents a variant: a named set of options with exactly one default."""

    name: str
    options: tuple[VariantOption, ...]
    themes: tuple[ThemeClass, ...] = field(default_factory=tuple)

    def __post_init__(self):
        defaults = [o.name for o in self.options if o.default]
        if not defaults:
            raise VariantDefinitionError(
                f"No default option specified for variant '{self.name}'. "
                "Please mark one option with `default`"
            )
        if len(defaults) > 1:
            raise VariantDefinitionError(
                f"Only one option of variant '{self.name}' can be marked as default: {defaults}"
            )
        names = [o.name for o in self.options]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise VariantDefinitionError(
                f"Duplicate options in variant '{self.name}': {duplicates}"
            )

    @property
    def default(self) -> VariantOption:
        return next(o for o in self.options if o.default)

    def option(self, name: str) -> Optional[VariantOption]:
        return next((o for o in self.options if o.name == name), None)


@dataclass(frozen=True)
class FieldDef:
    """Represents a component field and the variant type it takes."""

    name: str
    variant: str


@dataclass(frozen=True)
class ComponentDef:
    """Represents a component: a base class plus variant-typed fields."""

    name: str
    fields: tuple[FieldDef, ...] = field(default_factory=tuple)
    themes: tuple[ThemeClass, ...] = field(default_factory=tuple)
    merger: str = "merge"

    def __post_init__(self):
        names = [f.name for f in self.fields]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise VariantDefinitionError(
                f"Duplicate fields in component '{self.name}': {duplicates}"
            )
        reserved = sorted(set(names) & RESERVED_FIELDS)
        if reserved:
            raise VariantDefinitionError(
                f"Reserved field names in component '{self.name}': {reserved}"
            )
        if self.merger not in ("merge", "join"):
            raise VariantDefinitionError(
                f"Unknown merger '{self.merger}' for component '{self.name}'"
            )


# === Top-Level Root Structure ===


@dataclass(frozen=True)
class Definitions:
    """Represents the root of a variant definition file."""

    version: Version
    variants: tuple[VariantDef, ...] = field(default_factory=tuple)
    components: tuple[ComponentDef, ...] = field(default_factory=tuple)
    source_path: Optional[str] = None

    def __post_init__(self):
        names = [v.name for v in self.variants] + [c.name for c in self.components]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise VariantDefinitionError(f"Duplicate definitions: {duplicates}")
        known = {v.name for v in self.variants}
        for component in self.components:
            for f in component.fields:
                if f.variant not in known:
                    raise VariantDefinitionError(
                        f"Field '{component.name}.{f.name}' uses unknown variant '{f.variant}'"
                    )

    def variants_by_name(self) -> Dict[str, VariantDef]:
        return {v.name: v for v in self.variants}
