"""
Tests for runtime variants and components.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from twfuse import Registry, VariantDefinitionError
from twfuse.tw_ast import (
    BASE_THEME,
    ComponentDef,
    Definitions,
    FieldDef,
    ThemeClass,
    VariantDef,
    VariantOption,
    Version,
)

BUTTON_DEFS = """
version 1.0

variant BtnSize {
    default Default "h-9 px-4 py-2"
    Sm "h-8 px-3"
    Lg "h-10 px-8"
}

variant BtnColor {
    default Blue "bg-blue-500 text-blue-100"
    Red "bg-red-500 text-red-100"
}

component Btn "flex" {
    size: BtnSize
    color: BtnColor
}
"""

THEMED_DEFS = """
version 1.0

variant Size "text-gray-100" @dark "text-red-500" {
    default Md "h-9" @dark "px-4"
    Lg "h-10"
}

component Card "flex" @dark "flex-col items-center" @dark "rounded-lg" {
    size: Size
}
"""


@pytest.fixture
def registry():
    return Registry.from_string(BUTTON_DEFS)


@pytest.fixture
def btn(registry):
    return registry.component("Btn")


def test_defaults(btn):
    assert btn.to_class() == "flex h-9 px-4 py-2 bg-blue-500 text-blue-100"


def test_override_class(btn):
    assert btn.with_class("bg-green-500") == "flex h-9 px-4 py-2 text-blue-100 bg-green-500"


def test_choices(btn):
    assert btn.to_class(size="Sm", color="Red") == "flex h-8 px-3 bg-red-500 text-red-100"
    # Unset fields use their default option
    assert btn.to_class(color="Red") == "flex h-9 px-4 py-2 bg-red-500 text-red-100"
    assert btn.to_class(size=None) == btn.to_class()


def test_builder(btn):
    classes = btn.builder().set("size", "Sm").set("color", "Red").to_class()
    assert classes == "flex h-8 px-3 bg-red-500 text-red-100"
    assert btn.builder().with_class("px-1") == "flex h-9 py-2 bg-blue-500 text-blue-100 px-1"


def test_builder_unknown_field(btn):
    with pytest.raises(VariantDefinitionError, match="Unknown field"):
        btn.builder().set("shape", "Round")


def test_instance_round_trip(btn):
    instance = btn.instance(size="Lg")
    assert instance.choices == {"size": "Lg", "color": "Blue"}
    assert instance.builder().build() == instance
    assert instance.to_class() == "flex h-10 px-8 bg-blue-500 text-blue-100"
    assert instance.with_class("h-12") == "flex px-8 bg-blue-500 text-blue-100 h-12"
    assert instance != btn.instance()


def test_unknown_choices(btn):
    with pytest.raises(VariantDefinitionError, match="Unknown option 'Huge'"):
        btn.to_class(size="Huge")
    with pytest.raises(VariantDefinitionError, match="Unknown fields"):
        btn.to_class(shape="Round")


def test_class_list_order(btn):
    assert btn.class_list({"color": "Red"}, override="p-0") == [
        "flex",
        "h-9 px-4 py-2",
        "bg-red-500 text-red-100",
        "p-0",
    ]


def test_variant_as_class(registry):
    size = registry.variant("BtnSize")
    assert size.default == "Default"
    assert size.options == ("Default", "Sm", "Lg")
    assert size.as_class() == "h-9 px-4 py-2"
    assert size.as_class("Sm") == "h-8 px-3"
    with pytest.raises(VariantDefinitionError):
        size.as_class("Huge")


def test_unknown_names(registry):
    with pytest.raises(VariantDefinitionError, match="Unknown component"):
        registry.component("Missing")
    with pytest.raises(VariantDefinitionError, match="Unknown variant"):
        registry.variant("Missing")


def test_themes():
    registry = Registry.from_string(THEMED_DEFS)
    card = registry.component("Card")
    size = registry.variant("Size")

    assert size.as_class() == "text-gray-100 h-9"
    assert size.as_class(theme="dark") == "text-red-500 px-4"
    assert size.as_class("Lg", theme="dark") == "text-red-500"

    assert card.to_class() == "flex text-gray-100 h-9"
    assert card.to_class(theme="dark") == "flex-col items-center rounded-lg text-red-500 px-4"
    assert card.to_class(theme="print") == ""


def test_join_merger():
    registry = Registry.from_string(
        """
        version 1.0
        variant Pad { default Md "p-4" Sm "p-2" }
        component Box "p-1" uses join { pad: Pad }
        """
    )
    box = registry.component("Box")
    assert box.to_class() == "p-1 p-4"
    assert box.with_class("p-8", pad="Sm") == "p-1 p-2 p-8"


def test_registry_from_ast():
    definitions = Definitions(
        version=Version("1.0"),
        variants=(
            VariantDef(
                name="Tone",
                options=(
                    VariantOption("Neutral", (ThemeClass(BASE_THEME, "text-gray-900"),), True),
                    VariantOption("Danger", (ThemeClass(BASE_THEME, "text-red-600"),)),
                ),
            ),
        ),
        components=(
            ComponentDef(
                name="Label",
                fields=(FieldDef("tone", "Tone"),),
                themes=(ThemeClass(BASE_THEME, "text-sm text-black"),),
            ),
        ),
    )
    label = Registry(definitions).component("Label")
    assert label.fields == ("tone",)
    assert label.to_class() == "text-sm text-gray-900"
    assert label.to_class(tone="Danger") == "text-sm text-red-600"


def test_registry_from_file(tmp_path):
    path = tmp_path / "buttons.tw"
    path.write_text(BUTTON_DEFS, encoding="utf-8")
    btn = Registry.from_file(path).component("Btn")
    assert btn.to_class(size="Sm") == "flex h-8 px-3 bg-blue-500 text-blue-100"


def test_ast_validation():
    with pytest.raises(VariantDefinitionError):
        VariantDef(name="Empty", options=())
    with pytest.raises(VariantDefinitionError, match="Unknown merger"):
        ComponentDef(name="C", merger="concat")
