"""Bundled Forge documentation and keyword-based lookup.

Content is condensed from the Forge 5.0 documentation at
https://forge-fm.github.io/forge-documentation/5.0/
"""

from dataclasses import dataclass
from typing import Optional

DOCS_BASE_URL = "https://forge-fm.github.io/forge-documentation/5.0"


@dataclass(frozen=True)
class DocSection:
    """One topic of the bundled documentation."""
    title: str
    url: str
    keywords: tuple[str, ...]
    content: str


FORGE_DOCS: tuple[DocSection, ...] = (
    DocSection(
        title="Overview",
        url=f"{DOCS_BASE_URL}/building-models/overview/",
        keywords=("overview", "model", "system", "instance", "satisfiable", "unsatisfiable", "atoms", "what is forge"),
        content="""Forge is a tool (and a set of languages) for defining models of systems and exploring instances of those models.

Forge comprises three sublanguages:
- Froglet (#lang forge/froglet): modeling using only functions and partial functions
- Relational Forge (#lang forge): extends Froglet with relations and relational operators
- Temporal Forge (#lang forge/temporal): extends Forge with linear-temporal operators

An instance is a concrete scenario that abides by the rules of a model. A model is satisfiable if some instance satisfies it.

Given a lack of instructions, a program does nothing; given a lack of constraints, a model allows everything.""",
    ),
    DocSection(
        title="Sigs",
        url=f"{DOCS_BASE_URL}/building-models/sigs/sigs/",
        keywords=("sig", "signature", "type", "field", "declare", "define"),
        content="""Sigs (short for "signatures") are the basic building block of any model. They represent the types of the system being modeled.

Syntax:
  sig <name> {}
  sig <name> { <field>, <field>, ... }

Each field has a name, a multiplicity (one, lone, pfunc, func, or in Relational/Temporal Forge: set) and a type (a -> separated list of sig names, including Int).

Example:
  sig Node { left: lone Node, right: lone Node, val: one Int }

Field names must be unique across all sigs. Commas between fields, no comma after the last one.""",
    ),
    DocSection(
        title="Inheritance",
        url=f"{DOCS_BASE_URL}/building-models/sigs/inheritance/",
        keywords=("extends", "inherit", "parent", "child", "hierarchy"),
        content="""Sigs may inherit from other sigs via the extends keyword:
  sig <name> extends <parent sig name> { <additional fields> ... }

A sig has at most one parent. No object belongs to more than one immediate child of any sig. Child sigs inherit all fields from their parent.

Example:
  sig Cat { favoriteFood: one Food }
  sig ActorCat extends Cat { playName: one Play }""",
    ),
    DocSection(
        title="Singleton, Maybe, and Abstract Sigs",
        url=f"{DOCS_BASE_URL}/building-models/sigs/singleton-maybe-sigs/",
        keywords=("one sig", "lone sig", "abstract sig", "singleton", "abstract"),
        content="""Sig declarations can be annotated:
- one sig: always exactly one object of that sig
- lone sig: never more than one object of that sig
- abstract sig: any object of that sig must also be a member of some child sig

Example:
  abstract sig Student {}
  sig Undergrad, Grad extends Student {}""",
    ),
    DocSection(
        title="Field Multiplicity",
        url=f"{DOCS_BASE_URL}/building-models/sigs/multiplicity/",
        keywords=("multiplicity", "one", "lone", "set", "func", "pfunc", "partial function", "relation"),
        content="""Multiplicities define how data can be arranged in a field.
- one: exactly one object
- lone: zero or one object
- set: any number of objects (Relational and Temporal Forge only)
- func A -> B: total function
- pfunc A -> B: partial function, analogous to a map or dictionary

Example:
  sig Student { grades: pfunc Course -> Grade }

Froglet does NOT support set multiplicity.""",
    ),
    DocSection(
        title="Formula Operators",
        url=f"{DOCS_BASE_URL}/building-models/constraints/formulas/operators/",
        keywords=("not", "and", "or", "implies", "iff", "else", "operator", "negation", "conjunction", "disjunction"),
        content="""Formula operators combine smaller formulas:
- not (alt: !)
- and (alt: &&)
- or (alt: ||)
- implies (alt: =>), with an optional else branch
- iff (alt: <=>)

Consecutive formulas within { ... } are implicitly combined with "and".""",
    ),
    DocSection(
        title="Quantifiers",
        url=f"{DOCS_BASE_URL}/building-models/constraints/formulas/quantifiers/",
        keywords=("some", "all", "no", "lone", "one", "quantifier", "for all", "exists", "disj", "disjoint"),
        content="""Quantify over a unary set:
- some <x>: <expr> | { <fmla> }
- all <x>: <expr> | { <fmla> }
- no, lone and one quantifiers count how many elements satisfy fmla

Multiple variables:
  some <x>: <expr-a>, <y>: <expr-b> | { <fmla> }
  some <x>, <y>: <expr> | { <fmla> }

Disjoint quantification:
  some disj x, y: A | ...

WARNING: no, one, and lone quantifiers do NOT commute like some and all do.""",
    ),
    DocSection(
        title="Predicates",
        url=f"{DOCS_BASE_URL}/building-models/constraints/formulas/predicates/",
        keywords=("pred", "predicate", "reusable", "named constraint"),
        content="""Predicates define reusable named sets of constraints:
  pred <pred-name> {
    <fmla-1>
    <fmla-2>
  }

Predicates can have arguments:
  pred parentOrChildOf[p1, p2: Person] { ... }

Unless a predicate is explicitly used in run/check, it will not take effect.""",
    ),
    DocSection(
        title="Functions",
        url=f"{DOCS_BASE_URL}/building-models/constraints/expressions/functions/",
        keywords=("fun", "function", "helper", "reusable expression"),
        content="""Functions define reusable expressions (Relational and Temporal Forge):
  fun <fun-name>[<args>]: <result-type> { <expr> }

Example:
  fun inLawA[p: Person]: one Person { p.spouse.parent1 }

Functions may be used anywhere expressions can appear.""",
    ),
    DocSection(
        title="Let Expressions",
        url=f"{DOCS_BASE_URL}/building-models/constraints/expressions/let-expressions/",
        keywords=("let", "bind", "local", "variable"),
        content="""Bind an expression to an identifier locally:
  let <id> = <expression> | <formula>

let uses substitution, so avoid combining it with temporal operators.""",
    ),
    DocSection(
        title="Running Models",
        url=f"{DOCS_BASE_URL}/running-models/running/",
        keywords=("run", "check", "execute", "command", "counterexample"),
        content="""Run command, find satisfying instances:
  <run-name>: run <pred> for <bounds>
  <run-name>: run { <expr> } for <bounds>

Check command, find counterexamples:
  <check-name>: check <pred> for <bounds>

Unless a predicate is used in run/check (or invoked by one that is), it will NOT take effect.""",
    ),
    DocSection(
        title="Bounds",
        url=f"{DOCS_BASE_URL}/running-models/bounds/",
        keywords=("bounds", "scope", "numeric", "instance bounds", "exactly", "for", "inst", "upper bound"),
        content="""Forge is a bounded model finder.

Numeric bounds:
  run { ... } for 5 Cat, 2 Dog
  run { ... } for exactly 5 Cat
Default: up to 4 of each sig, Int bitwidth 4.

Instance bounds:
  inst exampleInstance {
    Person = `Person0 + `Person1
    spouse = `Person0 -> `Person1 + `Person1 -> `Person0
  }
Atom names are prefixed with a backtick. Use with: run {} for exampleInstance""",
    ),
    DocSection(
        title="Options",
        url=f"{DOCS_BASE_URL}/running-models/options/",
        keywords=("option", "verbose", "solver", "sterling", "setting", "configuration"),
        content="""Forge options: option <key> <value>

Common options: verbose, solver, logtranslation, coregranularity, core_minimization, sb, skolem_depth, run_sterling, test_keep, no_overflow.

Options apply from where they occur onward until changed.""",
    ),
    DocSection(
        title="Testing",
        url=f"{DOCS_BASE_URL}/testing-chapter/testing/",
        keywords=("test", "example", "assert", "test suite", "test expect", "necessary", "sufficient", "consistent", "sat", "unsat"),
        content="""Testing constructs:

1. example, test specific instances against predicates:
  example diagonalPasses is {wellformed} for { ... }

2. assert, abstract property tests:
  assert fullFirstRow is sufficient for winning for 1 Board
  assert fullFirstRow is sat

3. test suite, organize tests:
  test suite for winning { ... }

4. test expect, low-level checks:
  test expect { possibleToMove: {someMoveTaken} is sat }
Results: is sat, is unsat, is theorem, is checked, is forge_error.""",
    ),
    DocSection(
        title="Temporal Forge (Electrum)",
        url=f"{DOCS_BASE_URL}/electrum/electrum-overview/",
        keywords=("temporal", "electrum", "var", "always", "eventually", "next_state", "prev_state", "until", "trace", "lasso", "state"),
        content="""Temporal Forge (#lang forge/temporal) adds temporal operators. Traces are lasso-shaped.

var fields and var sigs may change over time. The prime operator (') refers to the next state.

Future-time: next_state, always, eventually, until, releases
Past-time: prev_state, historically, once, since, triggered""",
    ),
    DocSection(
        title="Integers",
        url=f"{DOCS_BASE_URL}/forge-standard-library/integers/",
        keywords=("int", "integer", "number", "add", "subtract", "multiply", "divide", "bitwidth", "overflow", "sum", "remainder"),
        content="""Forge uses bit-vector integers. With bitwidth k, integers range over [-2^(k-1), 2^(k-1)-1].

Operators: add, subtract, multiply, divide, remainder, abs, sign.
Counting: #expr. Aggregation: sum[atoms], max[atoms], min[atoms].

WARNING: add[7, 1] = -8 at bitwidth 4.""",
    ),
    DocSection(
        title="Glossary and Common Errors",
        url=f"{DOCS_BASE_URL}/glossary/",
        keywords=("error", "glossary", "arity", "atom", "contract violation", "unexpected type"),
        content="""Arity: number of columns in a relation. Atom: a distinct object within an instance.

"Contract violation" or "Unexpected type":
You used an expression where a formula was expected, or vice versa.
Example: "some p: Person | p.spouse" should be "some p: Person | some p.spouse".""",
    ),
)


def find_relevant_docs(query: str, max_sections: int = 6) -> list[DocSection]:
    """Find documentation sections relevant to a query.

    Scores keyword hits, title mentions and content word overlap; words
    shorter than three characters are ignored.
    """
    query_lower = query.lower()
    query_words = [w for w in query_lower.split() if len(w) > 2]

    scored = []
    for section in FORGE_DOCS:
        score = 0.0

        for keyword in section.keywords:
            if keyword in query_lower:
                score += 3
            for word in query_words:
                if keyword in word or word in keyword:
                    score += 1

        if section.title.lower() in query_lower:
            score += 5

        content_lower = section.content.lower()
        for word in query_words:
            if word in content_lower:
                score += 0.5

        if score > 0:
            scored.append((score, section))

    # Stable sort keeps bundle order between equal scores
    scored.sort(key=lambda x: x[0], reverse=True)
    return [section for _, section in scored[:max_sections]]


def build_docs_context(query: str) -> str:
    """Build a documentation context string for a prompt.

    Falls back to the first four sections when nothing matches.
    """
    sections = find_relevant_docs(query)

    if not sections:
        return "\n\n---\n\n".join(
            f"## {s.title}\n{s.content}" for s in FORGE_DOCS[:4]
        )

    return "\n\n---\n\n".join(
        f"## {s.title}\nSource: {s.url}\n\n{s.content}" for s in sections
    )


def keyword_doc(word: str) -> Optional[DocSection]:
    """Section documenting a Forge keyword, for hovers outside declarations."""
    word = word.lower()
    for section in FORGE_DOCS:
        if word in section.keywords:
            return section
    return None
