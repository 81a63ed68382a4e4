"""Tree-sitter parsing and public surface extraction for one file."""

from __future__ import annotations

from dataclasses import dataclass, field

import tree_sitter

from bumpguard.engine._types import TypeSymbol
from bumpguard.languages import get_language_module, get_parser


@dataclass(frozen=True)
class ParseResult:
    """Result of parsing a source file."""

    types: list[TypeSymbol] = field(default_factory=list)
    language: str = ""
    parse_error: bool = False
    error_message: str | None = None


def parse_file(source: str, language: str, module: str) -> ParseResult:
    """Parse source code and extract its public types.

    Args:
        source: The source code text
        language: Language identifier ("python")
        module: Dotted module name the types are qualified with

    Returns:
        ParseResult with extracted types
    """
    try:
        parser = get_parser(language)
    except ValueError as e:
        return ParseResult(
            types=[],
            language=language,
            parse_error=True,
            error_message=str(e),
        )

    source_bytes = source.encode("utf-8")
    tree: tree_sitter.Tree = parser.parse(source_bytes)

    has_error = tree.root_node.has_error

    lang_module = get_language_module(language)
    types = lang_module.extract_types(tree, module)

    return ParseResult(
        types=types,
        language=language,
        parse_error=has_error,
        error_message="Parse errors detected in source" if has_error else None,
    )
