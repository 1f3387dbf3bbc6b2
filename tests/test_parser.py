import os
import sys

import pytest
from lark.exceptions import UnexpectedInput, VisitError

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from twfuse import tw_parser
from twfuse.tw_ast import (
    BASE_THEME,
    ComponentDef,
    Definitions,
    FieldDef,
    ThemeClass,
    VariantDef,
    VariantDefinitionError,
    VariantOption,
)

BUTTON_DEFS = """
version 1.0

# Sizes
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


def test_parse_string_empty():
    with pytest.raises(UnexpectedInput):
        tw_parser.parse_string("")  # No version


def test_parse_string_version_only():
    defs = tw_parser.parse_string("version 1.0")
    assert isinstance(defs, Definitions)
    assert defs.version.value == "1.0"
    assert defs.variants == ()
    assert defs.components == ()


def test_parse_string_unsupported_version():
    with pytest.raises(VariantDefinitionError, match="Unsupported"):
        tw_parser.parse_string("version 2.0")


def test_parse_button_definitions():
    defs = tw_parser.parse_string(BUTTON_DEFS)
    assert [v.name for v in defs.variants] == ["BtnSize", "BtnColor"]

    size = defs.variants[0]
    assert isinstance(size, VariantDef)
    assert size.default.name == "Default"
    assert size.options[1] == VariantOption(
        name="Sm", themes=(ThemeClass(BASE_THEME, "h-8 px-3"),), default=False
    )
    assert size.option("Lg").themes == (ThemeClass(BASE_THEME, "h-10 px-8"),)
    assert size.option("Huge") is None

    (btn,) = defs.components
    assert isinstance(btn, ComponentDef)
    assert btn.name == "Btn"
    assert btn.themes == (ThemeClass(BASE_THEME, "flex"),)
    assert btn.fields == (FieldDef("size", "BtnSize"), FieldDef("color", "BtnColor"))
    assert btn.merger == "merge"


def test_parse_themes():
    code = """
    version 1.0
    variant Size "text-gray-100" @dark "text-red-500" {
        default Md "h-9" @dark "px-4"
        Sm @dark "px-2"
    }
    component Card "flex" @dark "flex-col" @dark "items-center" {
        size: Size
    }
    """
    defs = tw_parser.parse_string(code)
    size = defs.variants[0]
    assert size.themes == (
        ThemeClass(BASE_THEME, "text-gray-100"),
        ThemeClass("dark", "text-red-500"),
    )
    assert size.option("Md").themes == (
        ThemeClass(BASE_THEME, "h-9"),
        ThemeClass("dark", "px-4"),
    )
    assert size.option("Sm").themes == (ThemeClass("dark", "px-2"),)
    assert defs.components[0].themes[1:] == (
        ThemeClass("dark", "flex-col"),
        ThemeClass("dark", "items-center"),
    )


def test_parse_join_merger():
    code = """
    version 1.0
    variant V { default A "p-2" }
    component Plain "p-4" uses join { v: V }
    """
    assert tw_parser.parse_string(code).components[0].merger == "join"


def test_option_named_like_keyword():
    code = """
    version 1.0
    variant V {
        defaults "p-1"
        default Default "p-2"
    }
    """
    variant = tw_parser.parse_string(code).variants[0]
    assert [o.name for o in variant.options] == ["defaults", "Default"]
    assert variant.default.name == "Default"


def test_missing_default():
    code = 'version 1.0\nvariant V { A "p-1" B "p-2" }'
    with pytest.raises(VariantDefinitionError, match="No default"):
        tw_parser.parse_string(code)


def test_multiple_defaults():
    code = 'version 1.0\nvariant V { default A "p-1" default B "p-2" }'
    with pytest.raises(VariantDefinitionError, match="Only one option"):
        tw_parser.parse_string(code)


def test_errors_wrapped_without_unwrap():
    code = 'version 1.0\nvariant V { A "p-1" }'
    with pytest.raises(VisitError) as excinfo:
        tw_parser.parse_string(code, unwrap=False)
    assert isinstance(excinfo.value.orig_exc, VariantDefinitionError)


def test_unknown_variant_reference():
    code = 'version 1.0\ncomponent C "flex" { size: Missing }'
    with pytest.raises(VariantDefinitionError, match="unknown variant 'Missing'"):
        tw_parser.parse_string(code)


def test_duplicate_definitions():
    code = 'version 1.0\nvariant V { default A "" }\nvariant V { default B "" }'
    with pytest.raises(VariantDefinitionError, match="Duplicate definitions"):
        tw_parser.parse_string(code)


def test_duplicate_options_and_fields():
    with pytest.raises(VariantDefinitionError, match="Duplicate options"):
        tw_parser.parse_string('version 1.0\nvariant V { default A "" A "p-1" }')
    code = 'version 1.0\nvariant V { default A "" }\ncomponent C { a: V a: V }'
    with pytest.raises(VariantDefinitionError, match="Duplicate fields"):
        tw_parser.parse_string(code)


@pytest.mark.parametrize("field_name", ["theme", "override"])
def test_reserved_field_names(field_name):
    code = f'version 1.0\nvariant V {{ default A "" }}\ncomponent C {{ {field_name}: V }}'
    with pytest.raises(VariantDefinitionError, match="Reserved"):
        tw_parser.parse_string(code)


def test_syntax_error():
    with pytest.raises(UnexpectedInput):
        tw_parser.parse_string('version 1.0\nvariant V { default "p-1" }')


def test_parse_file(tmp_path):
    path = tmp_path / "buttons.tw"
    path.write_text(BUTTON_DEFS, encoding="utf-8")
    defs = tw_parser.parse_file(path)
    assert defs.source_path == str(path)
    assert defs.components[0].name == "Btn"
