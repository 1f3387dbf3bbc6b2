from pathlib import Path
from typing import Optional

from lark import Lark
from lark.exceptions import VisitError

from twfuse.tw_ast import Definitions, VariantDefinitionError
from twfuse.tw_transformer import TwTransformer

# Variant definition DSL version.
# This should match the version noted in the grammar file and be bumped when
# the grammar changes; files declaring any other version are rejected.
TW_DSL_VERSION = "1.0"

GRAMMAR_PATH = Path(__file__).parent / "tw_grammar.lark"
with open(GRAMMAR_PATH, "r", encoding="utf-8") as f:
    TW_GRAMMAR = f.read()

tw_parser = Lark(TW_GRAMMAR, start="start", parser="lalr", propagate_positions=True)


def parse_string(
    code: str, *, unwrap: bool = True, source_path: Optional[str] = None
) -> Definitions:
    """
    Parse variant definition source into a Definitions AST.

    Args:
        code: DSL source text
        unwrap: Re-raise the original exception instead of lark's VisitError
        source_path: Path recorded on the result, for diagnostics

    Returns:
        Definitions root node
    """
    tree = tw_parser.parse(code)
    try:
        definitions = TwTransformer(source_path=source_path).transform(tree)
    except VisitError as ve:
        if unwrap:
            raise ve.orig_exc from ve
        raise

    # Make sure the version matches the expected DSL version
    if definitions.version.value != TW_DSL_VERSION:
        raise VariantDefinitionError(
            f"Unsupported twfuse DSL version: {definitions.version.value}. "
            f"Expected {TW_DSL_VERSION}."
        )
    return definitions


def parse_file(path, *, unwrap: bool = True) -> Definitions:
    with open(path, "r", encoding="utf-8") as file:
        return parse_string(file.read(), unwrap=unwrap, source_path=str(path))
