"""Lark grammar for Forge models and the cached parser built from it."""

from functools import lru_cache

from lark import Lark, Tree

# Declaration rules are kept as named subtrees; expression precedence levels
# are inlined (?rule) so the tree stays shallow. Only declaration nodes are
# read downstream, so ambiguous expression parses are resolved arbitrarily.
FORGE_GRAMMAR = r"""
module: _paragraph*

_paragraph: sig_decl
          | pred_decl
          | fun_decl
          | fact_decl
          | assert_decl
          | cmd_decl
          | test_expect_decl
          | test_suite_decl
          | example_decl
          | inst_decl
          | option_decl
          | open_decl

// ---- module header ----

open_decl: "open" (STRING | qual_name) ("[" expr_list "]")? ("as" NAME)?
option_decl: "option" NAME option_value
?option_value: NAME | NUMBER | STRING | "-" NUMBER -> negative

// ---- signatures ----

sig_decl: sig_quals "sig" name_list sig_ext? "{" field_list? "}" block?
sig_quals: sig_qual*
!sig_qual: "abstract" | "one" | "lone" | "some" | "var"
sig_ext: "extends" qual_name                 -> sig_extends
       | "in" qual_name ("+" qual_name)*     -> sig_in

field_list: field_decl ("," field_decl)* ","?
field_decl: var_kw? name_list ":" field_mult? expr
!var_kw: "var"
!field_mult: "one" | "lone" | "set" | "func" | "pfunc" | "some"

// ---- predicates and functions ----

pred_decl: "pred" name para_decls? block
fun_decl: "fun" name para_decls? ":" fun_mult? expr block
!fun_mult: "one" | "lone" | "set" | "some"

para_decls: "[" (param_decl ("," param_decl)*)? "]"
          | "(" (param_decl ("," param_decl)*)? ")"
param_decl: disj_kw? name_list ":" param_mult? expr
!param_mult: "one" | "lone" | "set" | "some" | "func" | "pfunc"
!disj_kw: "disj"

// ---- facts, asserts, commands ----

fact_decl: "fact" name? block

assert_decl: "assert" name block                                   -> named_assert
           | "assert" expr "is" NAME ("for" expr)? scope?          -> property_assert

cmd_decl: (name ":")? cmd_verb (block | qual_name)? scope?
!cmd_verb: "run" | "check"

scope: "for" scope_body ("for" (bounds | qual_name))?
     | "for" (bounds | qual_name)
scope_body: NUMBER ("but" typescope ("," typescope)*)?
          | typescope ("," typescope)*
typescope: exactly_kw? NUMBER qual_name
!exactly_kw: "exactly"

// ---- testing ----

test_expect_decl: "test" "expect" name? "{" test_decl* "}"
test_decl: (name ":")? (block | qual_name) scope? "is" NAME
test_suite_decl: "test" "suite" "for" qual_name "{" _suite_item* "}"
_suite_item: example_decl | assert_decl | test_expect_decl

example_decl: "example" name "is" expr "for" bounds
inst_decl: "inst" name bounds

bounds: "{" bound* "}"
bound: expr ("is" NAME)?

// ---- expressions ----

block: "{" expr* "}"

?expr: or_expr

let_expr: "let" let_binding ("," let_binding)* _body
let_binding: name "=" expr

quant_expr: quant quant_decl ("," quant_decl)* _body
!quant: "all" | "some" | "no" | "lone" | "one"
quant_decl: disj_kw? name_list ":" set_kw? expr
!set_kw: "set"

_body: block
     | "|" expr

?or_expr: iff_expr (("or" | "||") iff_expr)*
?iff_expr: implies_expr (("iff" | "<=>") implies_expr)*
?implies_expr: and_expr (("implies" | "=>") implies_expr ("else" implies_expr)?)?
?and_expr: temporal_bin (("and" | "&&") temporal_bin)*
?temporal_bin: unary_formula (("until" | "releases" | "since" | "triggered") unary_formula)*

?unary_formula: ("not" | "!") unary_formula           -> negation
              | temporal_op unary_formula             -> temporal_unary
              | mult_op union_expr                    -> mult_formula
              | quant_expr
              | let_expr
              | compare_expr

!temporal_op: "always" | "eventually" | "after" | "before" | "once" | "historically"
            | "next_state" | "prev_state"
!mult_op: "no" | "some" | "lone" | "one"

?compare_expr: union_expr (compare_op union_expr)?
!compare_op: ("not" | "!")? ("=" | "in" | "<" | ">" | "<=" | ">=" | "=<" | "ni")
           | "!="

?union_expr: card_expr (("+" | "-") card_expr)*
?card_expr: "#" card_expr                             -> cardinality
          | override_expr
?override_expr: intersect_expr ("++" intersect_expr)*
?intersect_expr: arrow_expr ("&" arrow_expr)*
?arrow_expr: restrict_expr (arrow_op restrict_expr)*
!arrow_op: arrow_mult? "->" arrow_mult?
!arrow_mult: "set" | "one" | "lone" | "some" | "func" | "pfunc"
?restrict_expr: join_expr (("<:" | ":>") join_expr)*
?join_expr: box_expr ("." box_expr)*
?box_expr: unary_expr ("[" expr_list? "]")*
expr_list: expr ("," expr)*

?unary_expr: ("~" | "^" | "*") unary_expr            -> closure
           | primed_expr
?primed_expr: primary "'"?
?primary: qual_name
        | NUMBER
        | "-" NUMBER                                  -> negative
        | ATOM
        | "(" expr ")"
        | block
        | comprehension
        | "@" NAME                                    -> raw_name
        | sum_expr
        | "sum"                                       -> sum_name

sum_expr: "sum" quant_decl ("," quant_decl)* _body

comprehension: "{" quant_decl ("," quant_decl)* _body "}"

name_list: name ("," name)*
name: NAME
qual_name: NAME ("/" NAME)*

// ---- terminals ----

NAME: /[A-Za-z_][A-Za-z0-9_]*/
ATOM: /`[A-Za-z_][A-Za-z0-9_]*/
NUMBER: /[0-9]+/
STRING: /"[^"\n]*"/

LANG_LINE: /#lang[ \t][^\n]*/
LINE_COMMENT: /(\/\/|--)[^\n]*/
BLOCK_COMMENT: /\/\*[\s\S]*?\*\//

%import common.WS
%ignore WS
%ignore LANG_LINE
%ignore LINE_COMMENT
%ignore BLOCK_COMMENT
"""


@lru_cache(maxsize=1)
def get_parser() -> Lark:
    """Build the Forge parser once per process."""
    return Lark(
        FORGE_GRAMMAR,
        start="module",
        parser="earley",
        lexer="basic",
        propagate_positions=True,
    )


def parse_source(text: str) -> Tree:
    """Parse Forge source into a lark tree.

    Raises:
        lark.exceptions.LarkError: if the text is not valid Forge
    """
    return get_parser().parse(text)
