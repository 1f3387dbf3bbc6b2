"""
TW Transformer: Lark AST transformer for the variant definition DSL.

This module provides the TwTransformer class that converts Lark parse trees
into twfuse AST structures: variants with their options, components with their
fields, and the (optionally themed) class strings attached to each.
"""

from typing import Optional

from lark import Token, Transformer, v_args

from twfuse import tw_ast as ast


@v_args(inline=True)  # This simplifies most method signatures
class TwTransformer(Transformer):
    """
    Transformer that converts Lark parse trees into twfuse AST structures.

    Definition checks (defaults, duplicates, unknown variant types) run in the
    AST constructors and surface as VariantDefinitionError.
    """

    def __init__(self, source_path: Optional[str] = None):
        super().__init__()
        self.source_path = source_path

    def start(self, version, *definitions):
        """Transform root node with version, variants and components."""
        variants = []
        components = []
        for item in definitions:
            if isinstance(item, ast.VariantDef):
                variants.append(item)
            else:
                components.append(item)
        return ast.Definitions(
            version=version,
            variants=tuple(variants),
            components=tuple(components),
            source_path=self.source_path,
        )

    def version_stmt(self, version_token):
        """Transform version statement."""
        return ast.Version(value=str(version_token))

    def variant_def(self, name, *items):
        """Transform a variant with its base classes and options."""
        themes = tuple(i for i in items if isinstance(i, ast.ThemeClass))
        options = tuple(i for i in items if isinstance(i, ast.VariantOption))
        return ast.VariantDef(name=str(name), options=options, themes=themes)

    def option_def(self, *items):
        """Transform a variant option, with an optional leading ``default`` flag."""
        is_default = isinstance(items[0], Token) and items[0].type == "DEFAULT"
        if is_default:
            items = items[1:]
        name, themes = items[0], items[1:]
        return ast.VariantOption(
            name=str(name), themes=tuple(themes), default=is_default
        )

    def component_def(self, name, *items):
        """Transform a component with its base classes, merger and fields."""
        themes = tuple(i for i in items if isinstance(i, ast.ThemeClass))
        fields = tuple(i for i in items if isinstance(i, ast.FieldDef))
        mergers = [i for i in items if isinstance(i, str) and not isinstance(i, Token)]
        return ast.ComponentDef(
            name=str(name),
            fields=fields,
            themes=themes,
            merger=mergers[0] if mergers else "merge",
        )

    def merger(self, token):
        """Transform the ``uses`` clause into the merger name."""
        return str(token)

    def field_def(self, name, variant):
        """Transform a ``field: Variant`` declaration."""
        return ast.FieldDef(name=str(name), variant=str(variant))

    def plain_class(self, string):
        """Transform an unnamed class string (base theme)."""
        return ast.ThemeClass(theme=ast.BASE_THEME, classes=str(string)[1:-1])

    def theme_class(self, name, string):
        """Transform an ``@theme "classes"`` entry."""
        return ast.ThemeClass(theme=str(name), classes=str(string)[1:-1])
