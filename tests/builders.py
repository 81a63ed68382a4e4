"""Symbol table builders shared by the test modules."""

from __future__ import annotations

from bumpguard.engine._types import (
    MemberSymbol,
    ParameterSymbol,
    SymbolTable,
    TypeRef,
    TypeSymbol,
)


def param(type_name: str, *, is_input: bool = True, is_output: bool = False) -> ParameterSymbol:
    return ParameterSymbol(type=TypeRef(type_name), is_input=is_input, is_output=is_output)


def method(name: str, *params: str | ParameterSymbol, returns: str = "void") -> MemberSymbol:
    return MemberSymbol(
        name=name,
        return_type=TypeRef(returns),
        parameters=tuple(p if isinstance(p, ParameterSymbol) else param(p) for p in params),
    )


def type_(name: str, *members: MemberSymbol) -> TypeSymbol:
    return TypeSymbol.from_members(name, members)


def table(*types: TypeSymbol | str) -> SymbolTable:
    return SymbolTable.from_types(t if isinstance(t, TypeSymbol) else type_(t) for t in types)
