"""Per-language tree-sitter configurations."""

from __future__ import annotations

import importlib
import os
from types import ModuleType

import tree_sitter

SUPPORTED_LANGUAGES: set[str] = {"python"}

_EXTENSION_MAP: dict[str, str] = {
    ".py": "python",
    ".pyi": "python",
}

_LANG_TO_MODULE: dict[str, str] = {
    "python": "bumpguard.languages.python",
}


def detect_language(filename: str) -> str | None:
    """Detect language from file extension."""
    _, ext = os.path.splitext(filename)
    return _EXTENSION_MAP.get(ext)


def get_language_module(language: str) -> ModuleType:
    """Get the language module for a given language."""
    module_path = _LANG_TO_MODULE.get(language)
    if module_path is None:
        msg = f"Unsupported language: {language}"
        raise ValueError(msg)
    return importlib.import_module(module_path)


def get_parser(language: str) -> tree_sitter.Parser:
    """Get the tree-sitter parser for a language."""
    mod = get_language_module(language)
    lang: tree_sitter.Language = mod.get_language()
    return tree_sitter.Parser(lang)


def node_text(node: tree_sitter.Node | None) -> str:
    """Text of a tree-sitter node, whitespace-collapsed; empty for ``None``."""
    if node is None or node.text is None:
        return ""
    return " ".join(node.text.decode("utf-8").split())
