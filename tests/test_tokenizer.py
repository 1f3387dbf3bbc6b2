"""
Tests for class string tokenization.

Covers variant splitting, importance/negative markers, prefixes, custom
separators, bracket syntax and the opaque fallback for malformed classes.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from twfuse.merge import ClassToken, MergeOptions, Tokenizer, parse_classes
from twfuse.merge.tokenizer import iter_atoms, parse_atom


def test_plain_utility():
    token = parse_atom("p-4")
    assert isinstance(token, ClassToken)
    assert token.source == "p-4"
    assert token.variants == ()
    assert token.important is False
    assert token.negative is False
    assert token.elements == ("p", "4")
    assert token.arbitrary is None


def test_variant_chain():
    token = parse_atom("md:hover:bg-red-500")
    assert token.variants == ("md", "hover")
    assert token.elements == ("bg", "red", "500")


def test_leading_important_marker():
    token = parse_atom("hover:!p-4")
    assert token.important is True
    assert token.variants == ("hover",)
    assert token.elements == ("p", "4")
    assert token.source == "hover:!p-4"


def test_trailing_important_marker():
    token = parse_atom("p-4!")
    assert token.important is True
    assert token.elements == ("p", "4")


def test_negative_utility():
    token = parse_atom("-mt-4")
    assert token.negative is True
    assert token.elements == ("mt", "4")


def test_arbitrary_property():
    token = parse_atom("[color:blue]")
    assert token.elements == ()
    assert token.arbitrary.inner == "color:blue"
    assert token.arbitrary.label == "color"
    assert token.utility == "[color:blue]"


def test_arbitrary_value_after_utility():
    token = parse_atom("bg-[#fff]")
    assert token.elements == ("bg",)
    assert token.arbitrary.inner == "#fff"
    assert token.utility == "bg-[#fff]"


def test_arbitrary_value_with_opacity_modifier():
    token = parse_atom("bg-[#fff]/50")
    assert token.elements == ("bg",)
    assert token.arbitrary.inner == "#fff"


def test_arbitrary_value_with_nested_brackets():
    token = parse_atom("grid-cols-[repeat(2,minmax(0,1fr))]")
    assert token.elements == ("grid", "cols")
    assert token.arbitrary.inner == "repeat(2,minmax(0,1fr))"


def test_separator_inside_brackets_does_not_split():
    token = parse_atom("[&:hover]:p-4")
    assert token.variants == ("[&:hover]",)
    assert token.elements == ("p", "4")

    token = parse_atom("supports-[display:grid]:grid")
    assert token.variants == ("supports-[display:grid]",)
    assert token.elements == ("grid",)


@pytest.mark.parametrize(
    "atom",
    [
        "bg-[red",
        "bg-red]",
        "hover::p-4",
        ":p-4",
        "hover:",
        "p--4",
        "!",
        "-",
        "[]",
        "bg[red]",
        "bg-[red]x",
    ],
)
def test_malformed_classes_are_opaque(atom):
    assert parse_atom(atom) == atom


def test_prefix_is_stripped():
    token = parse_atom("hover:tw-bg-black", "tw-")
    assert token.variants == ("hover",)
    assert token.elements == ("bg", "black")
    assert token.source == "hover:tw-bg-black"


def test_missing_prefix_is_opaque():
    assert parse_atom("bg-black", "tw-") == "bg-black"


def test_negative_with_prefix():
    assert parse_atom("-tw-mt-4", "tw-").negative is True
    token = parse_atom("tw--mt-4", "tw-")
    assert token.negative is True
    assert token.elements == ("mt", "4")


def test_custom_separator():
    token = parse_atom("hover__p-4", "", "__")
    assert token.variants == ("hover",)
    assert token.elements == ("p", "4")
    # The default separator is just another character here
    assert parse_atom("hover:p-4", "", "__").variants == ()


def test_tokenize_preserves_order_across_strings():
    tokenizer = Tokenizer(MergeOptions())
    parsed = tokenizer.tokenize(["flex  items-center", "bg-[red", "p-4"])
    sources = [p.source if isinstance(p, ClassToken) else p for p in parsed]
    assert sources == ["flex", "items-center", "bg-[red", "p-4"]
    assert parsed[2] == "bg-[red"


def test_iter_atoms_skips_falsy_entries():
    atoms = list(iter_atoms(["  flex ", None, False, "", ["p-4  m-2", None]]))
    assert atoms == ["flex", "p-4", "m-2"]


def test_parse_classes_uses_given_options():
    parsed = parse_classes(["tw-p-4 p-4"], MergeOptions(prefix="tw-"))
    assert isinstance(parsed[0], ClassToken)
    assert parsed[1] == "p-4"
