"""Python language support: public surface extraction.

Visibility follows the usual convention: names with a leading underscore are
private, dunder methods are public. Module-level functions are members of a
type named after the module. When a scope defines ``@overload`` variants of a
name, each variant is a member and the undecorated implementation is not.
"""

from __future__ import annotations

import tree_sitter
import tree_sitter_python

from bumpguard.engine._types import MemberSymbol, ParameterSymbol, TypeRef, TypeSymbol
from bumpguard.languages import node_text

UNANNOTATED = "Any"

_SKIPPED_PARAM_NODES = {"keyword_separator", "positional_separator", "comment"}
_IMPLICIT_FIRST_PARAMS = {"self", "cls"}


def get_language() -> tree_sitter.Language:
    """Return the tree-sitter Language object for Python."""
    return tree_sitter.Language(tree_sitter_python.language())


def is_public(name: str) -> bool:
    """True for names without a leading underscore, and for dunders."""
    if name.startswith("__") and name.endswith("__") and len(name) > 4:
        return True
    return not name.startswith("_")


def extract_types(tree: tree_sitter.Tree, module: str) -> list[TypeSymbol]:
    """Extract the public types of a parsed module.

    Args:
        tree: Parsed tree-sitter tree.
        module: Dotted module name used to qualify every type.
    """
    types: list[TypeSymbol] = []
    functions = _collect_functions(tree.root_node, in_class=False)
    if functions:
        types.append(TypeSymbol.from_members(module, functions))
    _collect_classes(tree.root_node, module, types)
    return types


# ---------------------------------------------------------------------------
# Scope walking
# ---------------------------------------------------------------------------


def _definitions(scope: tree_sitter.Node) -> list[tuple[tree_sitter.Node, list[str]]]:
    """Direct definitions in *scope* paired with their decorator texts."""
    found: list[tuple[tree_sitter.Node, list[str]]] = []
    for child in scope.named_children:
        if child.type in ("function_definition", "class_definition"):
            found.append((child, []))
        elif child.type == "decorated_definition":
            definition = child.child_by_field_name("definition")
            if definition is None:
                continue
            decorators = [node_text(d) for d in child.named_children if d.type == "decorator"]
            found.append((definition, decorators))
    return found


def _is_overload(decorators: list[str]) -> bool:
    return any(d in ("@overload", "@typing.overload", "@t.overload") for d in decorators)


def _is_accessor(decorators: list[str]) -> bool:
    """``@x.setter`` / ``@x.deleter`` re-bind a property rather than add a member."""
    return any(d.endswith((".setter", ".deleter")) for d in decorators)


def _collect_functions(scope: tree_sitter.Node, *, in_class: bool) -> list[MemberSymbol]:
    defs = [
        (node, decorators)
        for node, decorators in _definitions(scope)
        if node.type == "function_definition"
    ]
    overloaded = {
        node_text(node.child_by_field_name("name"))
        for node, decorators in defs
        if _is_overload(decorators)
    }

    members: list[MemberSymbol] = []
    for node, decorators in defs:
        name = node_text(node.child_by_field_name("name"))
        if not name or not is_public(name) or _is_accessor(decorators):
            continue
        if name in overloaded and not _is_overload(decorators):
            continue
        members.append(_build_member(node, name, in_class=in_class))
    return members


def _collect_classes(scope: tree_sitter.Node, prefix: str, types: list[TypeSymbol]) -> None:
    for node, _ in _definitions(scope):
        if node.type != "class_definition":
            continue
        name = node_text(node.child_by_field_name("name"))
        if not name or not is_public(name):
            continue
        qualified = f"{prefix}.{name}"
        body = node.child_by_field_name("body")
        members = _collect_functions(body, in_class=True) if body is not None else []
        types.append(TypeSymbol.from_members(qualified, members))
        if body is not None:
            _collect_classes(body, qualified, types)


# ---------------------------------------------------------------------------
# Signatures
# ---------------------------------------------------------------------------


def _build_member(node: tree_sitter.Node, name: str, *, in_class: bool) -> MemberSymbol:
    params_node = node.child_by_field_name("parameters")
    return_node = node.child_by_field_name("return_type")
    parameters = _build_parameters(params_node, in_class=in_class) if params_node else ()
    return MemberSymbol(
        name=name,
        return_type=TypeRef(type_name(return_node) or UNANNOTATED),
        parameters=parameters,
    )


def _build_parameters(params: tree_sitter.Node, *, in_class: bool) -> tuple[ParameterSymbol, ...]:
    result: list[ParameterSymbol] = []
    first = True
    for child in params.named_children:
        if child.type in _SKIPPED_PARAM_NODES:
            continue
        name, annotation = _param_name_and_type(child)
        if first and in_class and name in _IMPLICIT_FIRST_PARAMS:
            first = False
            continue
        first = False
        result.append(ParameterSymbol(type=TypeRef(annotation), is_input=True, is_output=False))
    return tuple(result)


def _param_name_and_type(node: tree_sitter.Node) -> tuple[str, str]:
    """Return ``(name, type name)``; splats prefix the type with ``*`` / ``**``."""
    if node.type == "identifier":
        return node_text(node), UNANNOTATED
    if node.type == "list_splat_pattern":
        return _splat_name(node), f"*{UNANNOTATED}"
    if node.type == "dictionary_splat_pattern":
        return _splat_name(node), f"**{UNANNOTATED}"
    if node.type == "default_parameter":
        return node_text(node.child_by_field_name("name")), UNANNOTATED
    if node.type == "typed_default_parameter":
        return (
            node_text(node.child_by_field_name("name")),
            type_name(node.child_by_field_name("type")) or UNANNOTATED,
        )
    if node.type == "typed_parameter":
        annotation = type_name(node.child_by_field_name("type")) or UNANNOTATED
        target = node.named_children[0] if node.named_children else None
        if target is not None and target.type == "list_splat_pattern":
            return _splat_name(target), f"*{annotation}"
        if target is not None and target.type == "dictionary_splat_pattern":
            return _splat_name(target), f"**{annotation}"
        return node_text(target), annotation
    return node_text(node), UNANNOTATED


def _splat_name(node: tree_sitter.Node) -> str:
    return node_text(node).lstrip("*")


def type_name(annotation: tree_sitter.Node | None) -> str:
    """Canonical name of an annotation: its tokens joined without whitespace.

    ``dict[str, int]``, ``dict[str,int]`` and a multi-line spelling all give
    ``dict[str,int]``, as does ``dict[str, int,]``. Quoted forward references
    lose their quotes, so ``"Animal"`` names the same type as ``Animal``.
    """
    if annotation is None:
        return ""
    tokens = _type_tokens(annotation)
    # Trailing commas before a closing bracket
    kept = [
        tok
        for i, tok in enumerate(tokens)
        if not (tok == "," and i + 1 < len(tokens) and tokens[i + 1] in ("]", ")"))
    ]
    return "".join(kept)


def _type_tokens(node: tree_sitter.Node) -> list[str]:
    if node.type == "comment":
        return []
    if node.type == "string":
        parts = [c.text.decode("utf-8") for c in node.children if c.type == "string_content" and c.text]
        content = "".join(parts) if parts else node_text(node).strip("\"'")
        return ["".join(content.split())]
    if node.child_count == 0:
        return [node.text.decode("utf-8")] if node.text else []
    tokens: list[str] = []
    for child in node.children:
        tokens.extend(_type_tokens(child))
    return tokens
