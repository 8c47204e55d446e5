"""Classification and string forms of statement components."""

from typing import Dict, Iterable, List, Tuple

from rdflib.term import BNode, Literal, Node, URIRef

from .exceptions import UnsupportedTermException
from .utils import Statement

IRI = "iri"
LITERAL = "literal"
BLANK = "blank"


def term_kind(term: Node) -> str:
    """Classify a statement component as an IRI, a literal or a blank node."""
    if isinstance(term, BNode):
        return BLANK
    if isinstance(term, Literal):
        return LITERAL
    if isinstance(term, URIRef):
        return IRI
    raise UnsupportedTermException(
        f"Unsupported statement component {term!r} of type {type(term).__name__}"
    )


def canonical_term(term: Node) -> Node:
    """Return the canonical form of a term: literals are normalized, others kept."""
    if term_kind(term) == LITERAL:
        assert isinstance(term, Literal)  # nosec
        return term.normalize()
    return term


def term_string(term: Node, canonicalize: bool = False) -> str:
    """Stable string form of a named term, used when building signatures."""
    kind = term_kind(term)
    if kind == LITERAL and canonicalize:
        return canonical_term(term).n3()
    if kind == BLANK:
        raise UnsupportedTermException(
            f"Blank node {term.n3()} has no stable string form"
        )
    return term.n3()


def has_blank_nodes(statement: Statement) -> bool:
    return any(term_kind(term) == BLANK for term in statement)


def canonical_statement(statement: Statement) -> Statement:
    return tuple(canonical_term(term) for term in statement)


def blank_nodes_in(statements: Iterable[Statement]) -> List[BNode]:
    """Distinct blank nodes of the statements, in order of first appearance."""
    seen = {}  # type: Dict[BNode, bool]
    for statement in statements:
        for term in statement:
            if isinstance(term, BNode) and term not in seen:
                seen[term] = True
    return list(seen)


def partition(statements: Iterable[Statement]) -> Tuple[List[Statement], List[Statement]]:
    """Split statements into (grounded, blank) lists."""
    grounded = []  # type: List[Statement]
    blank = []  # type: List[Statement]
    for statement in statements:
        (blank if has_blank_nodes(statement) else grounded).append(statement)
    return grounded, blank

