"""Tests for the Forge parser and symbol extractor."""

import pytest
from lark import Token, Tree
from lark.exceptions import LarkError

from forgemunch_mcp.parser import (
    Symbol,
    SymbolKind,
    extract_symbols,
    make_symbol_id,
    parse_source,
    parse_symbols,
)


FORGE_SOURCE = '''#lang forge

/** A person in the model. */
sig Person {
    /** People this person knows. */
    friends: set Person,
    age: one Int
}

/** Checks basic well-formedness. */
pred wellFormed[p: Person] {
    p not in p.friends
}

fun friendsOf[p: Person]: set Person {
    p.friends
}

pred allWellFormed {
    all x: Person | wellFormed[x]
}
'''


def _by_name(symbols, name, kind=None):
    return [s for s in symbols if s.name == name and (kind is None or s.kind == kind)]


def test_parse_forge_source():
    """Sigs, fields, preds, funs, params and bound variables are found in order."""
    symbols = parse_symbols(FORGE_SOURCE)

    assert [(s.name, s.kind) for s in symbols] == [
        ("Person", SymbolKind.TYPE),
        ("friends", SymbolKind.FIELD),
        ("age", SymbolKind.FIELD),
        ("wellFormed", SymbolKind.PREDICATE),
        ("p", SymbolKind.PARAMETER),
        ("friendsOf", SymbolKind.FUNCTION),
        ("p", SymbolKind.PARAMETER),
        ("allWellFormed", SymbolKind.PREDICATE),
        ("x", SymbolKind.VARIABLE),
    ]


def test_sig_and_field_scenario():
    """sig Person { friends: set Person } gives a sig and an attributed field."""
    symbols = parse_symbols("sig Person { friends: set Person }")

    assert len(symbols) == 2
    sig, field = symbols
    assert sig.name == "Person"
    assert sig.kind == SymbolKind.TYPE
    assert field.name == "friends"
    assert field.kind == SymbolKind.FIELD
    assert "set Person" in field.detail
    assert "Person" in field.detail
    assert field.detail == "field in Person: set Person"
    assert field.container == "Person"


def test_documented_predicate_scenario():
    """A /** */ comment above a pred becomes its documentation."""
    source = (
        "/** Checks basic well-formedness. */\n"
        "pred wellFormed[p: Person] {\n"
        "    p not in p.friends\n"
        "}\n"
    )
    symbols = parse_symbols(source)
    pred = _by_name(symbols, "wellFormed")[0]

    assert pred.kind == SymbolKind.PREDICATE
    assert pred.documentation == "Checks basic well-formedness."
    assert "wellFormed[p: Person]" in pred.detail


def test_identifier_ranges():
    """Ranges cover only the identifier text, zero-based."""
    symbols = parse_symbols(FORGE_SOURCE)

    person = _by_name(symbols, "Person", SymbolKind.TYPE)[0]
    assert (person.range.start.line, person.range.start.character) == (3, 4)
    assert (person.range.end.line, person.range.end.character) == (3, 10)

    friends = _by_name(symbols, "friends", SymbolKind.FIELD)[0]
    assert (friends.range.start.line, friends.range.start.character) == (5, 4)
    assert friends.range.end.character == 11


def test_documentation_attached():
    symbols = parse_symbols(FORGE_SOURCE)

    assert _by_name(symbols, "Person")[0].documentation == "A person in the model."
    assert _by_name(symbols, "friends")[0].documentation == "People this person knows."
    # friends' line sits between the comment and age
    assert _by_name(symbols, "age")[0].documentation is None
    assert _by_name(symbols, "friendsOf")[0].documentation is None


def test_comment_does_not_bleed_past_declaration():
    source = (
        "/** Only for A. */\n"
        "sig A {}\n"
        "sig B {}\n"
    )
    symbols = parse_symbols(source)

    assert _by_name(symbols, "A")[0].documentation == "Only for A."
    assert _by_name(symbols, "B")[0].documentation is None


def test_plain_block_comment_not_documentation():
    symbols = parse_symbols("/* plain */\nsig A {}\n")
    assert symbols[0].documentation is None


def test_locals_never_documented():
    """Parameters and bound variables carry no documentation."""
    source = (
        "pred p[\n"
        "    /** not docs */\n"
        "    a: A\n"
        "] {\n"
        "    some\n"
        "    /** not docs */\n"
        "    b: A | b in a\n"
        "}\n"
    )
    symbols = parse_symbols(source)
    locals_ = [s for s in symbols if s.kind in (SymbolKind.PARAMETER, SymbolKind.VARIABLE)]

    assert {s.name for s in locals_} == {"a", "b"}
    assert all(s.documentation is None for s in locals_)


def test_name_lists_emit_one_symbol_each():
    """Comma-separated names share detail but get distinct ranges."""
    source = (
        "/** Shared. */\n"
        "sig A, B {\n"
        "    left, right: lone A\n"
        "}\n"
        "pred adj[x, y: A] {}\n"
    )
    symbols = parse_symbols(source)

    sigs = [s for s in symbols if s.kind == SymbolKind.TYPE]
    assert [s.name for s in sigs] == ["A", "B"]
    assert sigs[0].detail == sigs[1].detail
    assert sigs[0].documentation == sigs[1].documentation == "Shared."
    assert sigs[0].range != sigs[1].range

    fields = [s for s in symbols if s.kind == SymbolKind.FIELD]
    assert [s.name for s in fields] == ["left", "right"]
    assert fields[0].detail == fields[1].detail == "field in A: lone A"

    params = [s for s in symbols if s.kind == SymbolKind.PARAMETER]
    assert [s.name for s in params] == ["x", "y"]
    assert all(p.detail == "A" and p.container == "adj" for p in params)


def test_sig_detail_modifiers():
    source = (
        "abstract sig Animal {}\n"
        "one sig Dog extends Animal {}\n"
    )
    symbols = parse_symbols(source)

    assert symbols[0].detail == "abstract sig Animal"
    assert symbols[1].detail == "one sig Dog extends Animal"


def test_fields_attributed_to_their_own_sig():
    source = (
        "sig A { f: set A }\n"
        "sig B { g: one A }\n"
    )
    symbols = parse_symbols(source)

    assert _by_name(symbols, "f")[0].detail == "field in A: set A"
    assert _by_name(symbols, "g")[0].detail == "field in B: one A"
    assert _by_name(symbols, "g")[0].container == "B"


def test_function_detail():
    symbols = parse_symbols(FORGE_SOURCE)
    fun = _by_name(symbols, "friendsOf")[0]

    assert fun.detail == "fun friendsOf[p: Person]: set Person"


def test_function_without_parameters():
    symbols = parse_symbols("fun everyone: set Person { Person }\n")

    assert symbols[0].kind == SymbolKind.FUNCTION
    assert symbols[0].detail == "fun everyone: set Person"


def test_predicate_without_parameters():
    symbols = parse_symbols(FORGE_SOURCE)
    assert _by_name(symbols, "allWellFormed")[0].detail == "pred allWellFormed"


@pytest.mark.parametrize("body", [
    "some A implies some y: A | y in A",
    "some A and all y: A | y in A",
    "some A or no y: A | y in A",
    "not some y: A | y in A",
    "always all y: A | y in A",
    "some A implies let y = A | some y",
])
def test_binder_as_operand(body):
    """Quantifiers and lets parse as the operand of formula operators."""
    symbols = parse_symbols(f"sig A {{ r: set A }}\npred p {{ {body} }}\n")

    assert [s.name for s in symbols[:3]] == ["A", "r", "p"]
    if "let" not in body:
        variable = _by_name(symbols, "y", SymbolKind.VARIABLE)[0]
        assert variable.detail == "A"


def test_quantifier_on_right_of_implies_keeps_file():
    """A nested binder deep in a model does not lose the other declarations."""
    source = (
        "sig A { r: set A }\n"
        "pred p { some A implies some y: A | y in A }\n"
        "pred q[a: A] { a in a.r }\n"
    )
    names = [s.name for s in parse_symbols(source)]
    assert names == ["A", "r", "p", "y", "q", "a"]


def test_sum_aggregate():
    """sum binds a variable; sum[...] still works as a call."""
    source = (
        "sig A { v: one Int }\n"
        "fun total: one Int { sum a: A | a.v }\n"
        "pred big { total = sum b: A | b.v\n"
        "    sum[A.v] > 3 }\n"
    )
    symbols = parse_symbols(source)

    assert [(s.name, s.kind) for s in symbols] == [
        ("A", SymbolKind.TYPE),
        ("v", SymbolKind.FIELD),
        ("total", SymbolKind.FUNCTION),
        ("a", SymbolKind.VARIABLE),
        ("big", SymbolKind.PREDICATE),
        ("b", SymbolKind.VARIABLE),
    ]
    assert _by_name(symbols, "a")[0].detail == "A"
    assert _by_name(symbols, "total")[0].detail == "fun total: one Int"


def test_set_qualified_bound_variable():
    symbols = parse_symbols("pred p { some s: set Person | some s }\n")
    variable = _by_name(symbols, "s", SymbolKind.VARIABLE)[0]

    assert variable.detail == "set Person"


def test_test_and_example_symbols():
    source = (
        "sig Person {}\n"
        "test expect {\n"
        "    canExist: { some Person } is sat\n"
        "}\n"
        "example lonely is { some Person } for {\n"
        "    Person = `P0\n"
        "}\n"
    )
    symbols = parse_symbols(source)

    test = _by_name(symbols, "canExist")[0]
    assert test.kind == SymbolKind.TEST
    assert test.detail == "canExist is sat"
    assert test.documentation is None

    example = _by_name(symbols, "lonely")[0]
    assert example.kind == SymbolKind.EXAMPLE
    assert example.detail.startswith("example lonely is")


def test_field_outside_sig_emits_nothing():
    """A field declaration with no enclosing sig is skipped."""
    name = Token("NAME", "orphan", line=1, column=1)
    tree = Tree("module", [
        Tree("field_decl", [
            Tree("name_list", [Tree("name", [name])]),
            Token("NAME", "A", line=1, column=9),
        ]),
    ])

    assert extract_symbols(tree, "orphan: A") == []


def test_extraction_is_idempotent():
    tree = parse_source(FORGE_SOURCE)

    first = extract_symbols(tree, FORGE_SOURCE)
    second = extract_symbols(tree, FORGE_SOURCE)

    assert first == second
    assert parse_symbols(FORGE_SOURCE) == parse_symbols(FORGE_SOURCE)


def test_malformed_source_returns_empty():
    """Unparseable text yields no symbols rather than raising."""
    assert parse_symbols("sig { { {") == []
    assert extract_symbols(None, "anything") == []


def test_parse_source_raises_on_error():
    with pytest.raises(LarkError):
        parse_source("pred [")


def test_comments_and_lang_line_ignored():
    source = (
        "#lang forge/froglet\n"
        "option run_sterling off\n"
        "// a line comment\n"
        "-- another\n"
        "sig A {}\n"
        "run { some A } for 3\n"
    )
    symbols = parse_symbols(source)
    assert [s.name for s in symbols] == ["A"]


def test_symbol_id_format():
    """Test symbol ID generation."""
    symbols = parse_symbols("sig Person { friends: set Person }")

    assert make_symbol_id("models/social.frg", symbols[0]) == "models-social-frg::Person@0"
    assert make_symbol_id("social.frg", symbols[1]) == "social-frg::Person.friends@0"


def test_symbol_is_frozen():
    symbol = parse_symbols("sig A {}")[0]
    assert isinstance(symbol, Symbol)
    with pytest.raises(AttributeError):
        symbol.name = "B"
