"""
Runtime variants and components.

Turns variant/component definitions into objects that render class strings.
A component's classes are fused in this precedence order (last wins):

1. Component base class
2. For each field, in declaration order: the variant base class, then the
   chosen option's class
3. The caller's override class

Unset fields fall back to the variant's default option. Every class can be
declared per theme; rendering without a theme uses the ``base`` theme.
"""

import logging
from typing import Callable, Dict, List, Mapping, Optional

from twfuse.merge import join, merge
from twfuse.tw_ast import (
    BASE_THEME,
    ComponentDef,
    Definitions,
    VariantDef,
    VariantDefinitionError,
    classes_for_theme,
)
from twfuse.tw_parser import parse_file, parse_string

logger = logging.getLogger(__name__)

FUSERS: Dict[str, Callable[..., str]] = {"merge": merge, "join": join}


def _theme_name(theme: Optional[str]) -> str:
    return theme if theme is not None else BASE_THEME


class Variant:
    """A customizable property of a component, rendered from its options."""

    def __init__(self, definition: VariantDef):
        self.definition = definition
        self.name = definition.name

    @property
    def default(self) -> str:
        """Name of the default option."""
        return self.definition.default.name

    @property
    def options(self) -> tuple:
        return tuple(o.name for o in self.definition.options)

    def as_class(self, option: Optional[str] = None, theme: Optional[str] = None) -> str:
        """
        Render the variant base class followed by the option's class.

        Args:
            option: Option name; the default option when None
            theme: Theme name; ``base`` when None

        Returns:
            The joined class string (empty when the theme declares nothing)
        """
        name = option if option is not None else self.default
        chosen = self.definition.option(name)
        if chosen is None:
            raise VariantDefinitionError(
                f"Unknown option '{name}' for variant '{self.name}'. "
                f"Expected one of {list(self.options)}"
            )
        theme_name = _theme_name(theme)
        return join(
            classes_for_theme(self.definition.themes, theme_name),
            classes_for_theme(chosen.themes, theme_name),
        )

    def __repr__(self) -> str:
        return f"Variant({self.name!r}, options={list(self.options)!r})"


class Component:
    """A UI element composed of a base class and variant-typed fields."""

    def __init__(self, definition: ComponentDef, variants: Mapping[str, Variant]):
        self.definition = definition
        self.name = definition.name
        self.field_variants: Dict[str, Variant] = {
            f.name: variants[f.variant] for f in definition.fields
        }
        self.fuse = FUSERS[definition.merger]

    @property
    def fields(self) -> tuple:
        return tuple(self.field_variants)

    def resolve_choices(self, choices: Mapping[str, Optional[str]]) -> Dict[str, str]:
        """Validate field choices and fill unset fields with their default option."""
        unknown = sorted(set(choices) - set(self.field_variants))
        if unknown:
            raise VariantDefinitionError(
                f"Unknown fields for component '{self.name}': {unknown}"
            )
        resolved = {}
        for field_name, variant in self.field_variants.items():
            option = choices.get(field_name)
            if option is None:
                option = variant.default
            elif option not in variant.options:
                raise VariantDefinitionError(
                    f"Unknown option '{option}' for field '{self.name}.{field_name}' "
                    f"({variant.name}). Expected one of {list(variant.options)}"
                )
            resolved[field_name] = option
        return resolved

    def class_list(
        self,
        choices: Optional[Mapping[str, Optional[str]]] = None,
        theme: Optional[str] = None,
        override: str = "",
    ) -> List[str]:
        """
        Build the ordered precedence list of class strings fed to the fuser.

        Args:
            choices: Field name -> option name; missing fields use defaults
            theme: Theme name; ``base`` when None
            override: Caller classes, highest precedence

        Returns:
            Class strings, lowest precedence first
        """
        resolved = self.resolve_choices(choices or {})
        theme_name = _theme_name(theme)
        classes = [classes_for_theme(self.definition.themes, theme_name)]
        for field_name, variant in self.field_variants.items():
            classes.append(variant.as_class(resolved[field_name], theme_name))
        classes.append(override)
        return classes

    def to_class(self, theme: Optional[str] = None, **choices: Optional[str]) -> str:
        return self.with_class("", theme, **choices)

    def with_class(
        self, override: str, theme: Optional[str] = None, **choices: Optional[str]
    ) -> str:
        """Render the component, appending ``override`` with the highest precedence."""
        classes = self.class_list(choices, theme, override)
        logger.debug("Rendering %s with %s", self.name, classes)
        return self.fuse(classes)

    def instance(self, **choices: Optional[str]) -> "ComponentInstance":
        return ComponentInstance(self, self.resolve_choices(choices))

    def builder(self) -> "ComponentBuilder":
        return ComponentBuilder(self)

    def __repr__(self) -> str:
        return f"Component({self.name!r}, fields={list(self.fields)!r})"


class ComponentInstance:
    """A component with every field set to a concrete option."""

    def __init__(self, component: Component, choices: Mapping[str, str]):
        self.component = component
        self.choices = dict(choices)

    def class_list(self, theme: Optional[str] = None, override: str = "") -> List[str]:
        return self.component.class_list(self.choices, theme, override)

    def to_class(self, theme: Optional[str] = None) -> str:
        return self.component.with_class("", theme, **self.choices)

    def with_class(self, override: str, theme: Optional[str] = None) -> str:
        return self.component.with_class(override, theme, **self.choices)

    def builder(self) -> "ComponentBuilder":
        builder = ComponentBuilder(self.component)
        for field_name, option in self.choices.items():
            builder.set(field_name, option)
        return builder

    def __eq__(self, other) -> bool:
        if not isinstance(other, ComponentInstance):
            return NotImplemented
        return self.component is other.component and self.choices == other.choices

    def __repr__(self) -> str:
        return f"ComponentInstance({self.component.name!r}, {self.choices!r})"


class ComponentBuilder:
    """Collects field choices; every field left unset uses its default option."""

    def __init__(self, component: Component):
        self.component = component
        self._choices: Dict[str, str] = {}

    def set(self, field_name: str, option: str) -> "ComponentBuilder":
        if field_name not in self.component.field_variants:
            raise VariantDefinitionError(
                f"Unknown field '{field_name}' for component '{self.component.name}'"
            )
        self._choices[field_name] = option
        return self

    def build(self) -> ComponentInstance:
        return self.component.instance(**self._choices)

    def to_class(self, theme: Optional[str] = None) -> str:
        return self.build().to_class(theme)

    def with_class(self, override: str, theme: Optional[str] = None) -> str:
        return self.build().with_class(override, theme)


class Registry:
    """Runtime lookup of the variants and components of a Definitions tree."""

    def __init__(self, definitions: Definitions):
        self.definitions = definitions
        self.variants: Dict[str, Variant] = {
            v.name: Variant(v) for v in definitions.variants
        }
        self.components: Dict[str, Component] = {
            c.name: Component(c, self.variants) for c in definitions.components
        }
        logger.info(
            "Loaded %s variants and %s components",
            len(self.variants),
            len(self.components),
        )

    @classmethod
    def from_string(cls, code: str) -> "Registry":
        return cls(parse_string(code))

    @classmethod
    def from_file(cls, path) -> "Registry":
        return cls(parse_file(path))

    def variant(self, name: str) -> Variant:
        try:
            return self.variants[name]
        except KeyError:
            raise VariantDefinitionError(f"Unknown variant '{name}'") from None

    def component(self, name: str) -> Component:
        try:
            return self.components[name]
        except KeyError:
            raise VariantDefinitionError(f"Unknown component '{name}'") from None
