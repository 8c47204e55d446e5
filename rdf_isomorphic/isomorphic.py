"""
Isomorphism between RDF graphs, and the blank node bijection witnessing it.

Named terms (IRIs and literals) must match exactly; only blank nodes may be
renamed.  The search runs in stages:

1. statements without blank nodes must be shared by both graphs;
2. every blank node gets a signature hashed from the statements it appears
   in, folding in the signatures of neighbouring blank nodes once those are
   grounded (known to be stable);
3. blank nodes with equal signatures are paired across the two graphs;
4. when pairing leaves ambiguity, an ungrounded pair is speculatively given
   the same signature and the search recurses, backtracking on failure.

See http://www.hpl.hp.com/techreports/2001/HPL-2001-293.pdf
"""

import hashlib
import logging
from collections import Counter
from typing import Any, Dict, List, NamedTuple, Optional, Sequence, Tuple, cast

from rdflib.graph import Dataset, Graph
from rdflib.term import BNode, Node

from .statements import GraphLike, StatementGraph, as_statement_graph
from .terms import (
    BLANK,
    blank_nodes_in,
    canonical_statement,
    partition,
    term_kind,
    term_string,
)
from .utils import BijectionType, SignatureMap, Statement, json_dumps

_logger = logging.getLogger("isomorphic")

ITSELF = "itself"
UNGROUNDED = "a blank node"


class IsomorphismOptions:
    """
    Per-call settings for an isomorphism query.

    canonicalize_literals: compare literals by their canonical lexical form,
    so ``"01"^^xsd:integer`` and ``"1"^^xsd:integer`` are the same term.

    max_depth: abandon a search branch after this many speculative pairings.
    ``None`` searches exhaustively.
    """

    def __init__(
        self, canonicalize_literals: bool = False, max_depth: Optional[int] = None
    ) -> None:
        self.canonicalize_literals = canonicalize_literals
        self.max_depth = max_depth

    def __repr__(self) -> str:
        return "IsomorphismOptions(canonicalize_literals={}, max_depth={})".format(
            self.canonicalize_literals, self.max_depth
        )


class BlankPartition(NamedTuple):
    """The statements of a graph that mention blank nodes, and those nodes."""

    statements: List[Statement]
    nodes: List[BNode]


def ground_match(
    graph_a: StatementGraph, graph_b: StatementGraph, canonicalize_literals: bool = False
) -> Optional[Tuple[BlankPartition, BlankPartition]]:
    """
    Check the statements without blank nodes, and split off the rest.

    Returns ``None`` when the graphs cannot be isomorphic: their sizes differ,
    or a statement of ``graph_a`` without blank nodes is missing from
    ``graph_b``.
    """
    if graph_a.count() != graph_b.count():
        _logger.debug(
            "Statement counts differ: %d != %d", graph_a.count(), graph_b.count()
        )
        return None

    grounded_a, blank_a = partition(graph_a.all_statements())
    grounded_b, blank_b = partition(graph_b.all_statements())
    if len(blank_a) != len(blank_b):
        _logger.debug(
            "Blank node statement counts differ: %d != %d", len(blank_a), len(blank_b)
        )
        return None

    if canonicalize_literals:
        if Counter(map(canonical_statement, grounded_a)) != Counter(
            map(canonical_statement, grounded_b)
        ):
            _logger.debug("Grounded statements differ after canonicalization")
            return None
    else:
        for statement in grounded_a:
            if not graph_b.contains(statement):
                _logger.debug("No match for grounded statement %s", statement)
                return None

    return (
        BlankPartition(blank_a, blank_nodes_in(blank_a)),
        BlankPartition(blank_b, blank_nodes_in(blank_b)),
    )


def _component_string(
    term: Node, node: BNode, grounded: SignatureMap, canonicalize: bool
) -> str:
    if term_kind(term) == BLANK:
        if term == node:
            return ITSELF
        return grounded.get(cast(BNode, term), UNGROUNDED)
    return term_string(term, canonicalize)


def statement_signature(
    statement: Statement, node: BNode, grounded: SignatureMap, canonicalize: bool = False
) -> str:
    """Render one statement as seen from ``node``."""
    return json_dumps(
        [_component_string(term, node, grounded, canonicalize) for term in statement]
    )


def _digest(parts: Any) -> str:
    return hashlib.sha1(json_dumps(parts).encode("utf-8")).hexdigest()  # nosec


def node_signature(
    node: BNode,
    statements: Sequence[Statement],
    grounded: SignatureMap,
    canonicalize: bool = False,
) -> Tuple[bool, str]:
    """
    Hash the statements ``node`` appears in.

    Returns whether the signature is grounded (every other blank node in
    those statements already has a grounded signature) and the signature.
    The statement signatures are sorted since statements have no canonical
    order.
    """
    signatures = []
    is_grounded = True
    for statement in statements:
        if node not in statement:
            continue
        signatures.append(statement_signature(statement, node, grounded, canonicalize))
        for term in statement:
            if term_kind(term) == BLANK and term != node and term not in grounded:
                is_grounded = False
    return is_grounded, _digest(sorted(signatures))


def hash_nodes(
    statements: Sequence[Statement],
    nodes: Sequence[BNode],
    grounded: Optional[SignatureMap] = None,
    canonicalize: bool = False,
) -> Tuple[SignatureMap, SignatureMap]:
    """
    Compute signatures for ``nodes`` until no more of them become grounded.

    ``grounded`` seeds the signatures known to be stable; it is not
    modified.  Returns the grounded signatures and the tentative ones, the
    latter covering every node.
    """
    grounded = dict(grounded or {})
    tentative = {}  # type: SignatureMap
    incident = {
        node: [statement for statement in statements if node in statement]
        for node in nodes
    }  # type: Dict[BNode, List[Statement]]

    while True:
        known = dict(grounded)
        for node in nodes:
            if node in known:
                tentative[node] = known[node]
                continue
            is_grounded, signature = node_signature(
                node, incident[node], known, canonicalize
            )
            tentative[node] = signature
            if is_grounded:
                grounded[node] = signature

        # A signature no other node shares cannot be ambiguous.
        counts = Counter(tentative.values())
        for node in nodes:
            if node not in grounded and counts[tentative[node]] == 1:
                grounded[node] = tentative[node]

        if len(grounded) == len(known):
            return grounded, tentative


def grounded_signatures_agree(grounded_a: SignatureMap, grounded_b: SignatureMap) -> bool:
    return Counter(grounded_a.values()) == Counter(grounded_b.values())


def extract(
    nodes_a: Sequence[BNode],
    nodes_b: Sequence[BNode],
    tentative_a: SignatureMap,
    tentative_b: SignatureMap,
) -> BijectionType:
    """
    Pair nodes of both graphs that have equal signatures.

    Each node of ``nodes_b`` is used at most once, so the result may be
    partial.
    """
    pool = {}  # type: Dict[str, List[BNode]]
    for other in nodes_b:
        pool.setdefault(tentative_b[other], []).append(other)

    mapping = {}  # type: BijectionType
    for node in nodes_a:
        candidates = pool.get(tentative_a[node])
        if candidates:
            mapping[node] = candidates.pop(0)
    return mapping


def is_complete(
    mapping: BijectionType, nodes_a: Sequence[BNode], nodes_b: Sequence[BNode]
) -> bool:
    return set(mapping.keys()) == set(nodes_a) and set(mapping.values()) == set(nodes_b)


def preserves_statements(
    mapping: BijectionType,
    statements_a: Sequence[Statement],
    statements_b: Sequence[Statement],
    canonicalize: bool = False,
) -> bool:
    """Check that renaming the blank nodes of ``statements_a`` yields ``statements_b``."""
    images = Counter()  # type: Counter[Statement]
    for statement in statements_a:
        image = tuple(
            mapping[cast(BNode, term)] if term_kind(term) == BLANK else term
            for term in statement
        )
        images[canonical_statement(image) if canonicalize else image] += 1
    targets = Counter(
        canonical_statement(statement) if canonicalize else statement
        for statement in statements_b
    )  # type: Counter[Statement]
    return images == targets


def _pinned_signature(node: BNode, depth: int) -> str:
    return _digest(["pinned", depth, node.n3()])


def _with_pin(grounded: SignatureMap, node: BNode, pinned: str) -> SignatureMap:
    seeds = dict(grounded)
    seeds[node] = pinned
    return seeds


def refine(
    statements_a: Sequence[Statement],
    nodes_a: Sequence[BNode],
    statements_b: Sequence[Statement],
    nodes_b: Sequence[BNode],
    grounded_a: Optional[SignatureMap] = None,
    grounded_b: Optional[SignatureMap] = None,
    options: Optional[IsomorphismOptions] = None,
    depth: int = 0,
) -> Optional[BijectionType]:
    """
    Search for a bijection from ``nodes_a`` to ``nodes_b``.

    Signatures are hashed starting from the grounded seeds; if the pairing
    of equal signatures is a bijection that maps ``statements_a`` onto
    ``statements_b`` it is returned.  Otherwise the first ungrounded node of
    ``nodes_a`` is pinned to each compatible ungrounded node of ``nodes_b``
    in turn, by giving both the same fresh grounded signature, and the
    search recurses.  Returns ``None`` when no pairing works.
    """
    if options is None:
        options = IsomorphismOptions()
    canonicalize = options.canonicalize_literals

    grounded_a, tentative_a = hash_nodes(statements_a, nodes_a, grounded_a, canonicalize)
    grounded_b, tentative_b = hash_nodes(statements_b, nodes_b, grounded_b, canonicalize)

    if not grounded_signatures_agree(grounded_a, grounded_b):
        _logger.debug(
            "Depth %d: grounded signatures differ (%d and %d grounded nodes)",
            depth,
            len(grounded_a),
            len(grounded_b),
        )
        return None

    candidate = extract(nodes_a, nodes_b, tentative_a, tentative_b)
    if is_complete(candidate, nodes_a, nodes_b) and preserves_statements(
        candidate, statements_a, statements_b, canonicalize
    ):
        _logger.debug("Depth %d: found bijection of %d blank nodes", depth, len(candidate))
        return candidate

    ungrounded_a = [node for node in nodes_a if node not in grounded_a]
    ungrounded_b = [other for other in nodes_b if other not in grounded_b]
    if not ungrounded_a:
        _logger.debug("Depth %d: every node is grounded but no bijection fits", depth)
        return None
    available = {tentative_b[other] for other in ungrounded_b}
    for node in ungrounded_a:
        if tentative_a[node] not in available:
            _logger.debug("Depth %d: nothing can pair with %s", depth, node.n3())
            return None

    if options.max_depth is not None and depth >= options.max_depth:
        _logger.warning(
            "Abandoning search branch after %d speculative pairings "
            "with %d blank nodes still ungrounded",
            depth,
            len(ungrounded_a),
        )
        return None

    # Every bijection must map this node somewhere, so trying the others
    # as the pinned node cannot find anything this one misses.
    node = ungrounded_a[0]
    for other in ungrounded_b:
        if tentative_b[other] != tentative_a[node]:
            continue
        _logger.debug("Depth %d: trying %s -> %s", depth, node.n3(), other.n3())
        pinned = _pinned_signature(node, depth)
        found = refine(
            statements_a,
            nodes_a,
            statements_b,
            nodes_b,
            _with_pin(grounded_a, node, pinned),
            _with_pin(grounded_b, other, pinned),
            options,
            depth + 1,
        )
        if found is not None:
            return found
    return None


def bijection(
    graph_a: GraphLike, graph_b: GraphLike, options: Optional[IsomorphismOptions] = None
) -> Optional[BijectionType]:
    """
    Map the blank nodes of ``graph_a`` onto those of ``graph_b``.

    Returns ``None`` if the graphs are not isomorphic.
    """
    if options is None:
        options = IsomorphismOptions()
    statements_a = as_statement_graph(graph_a)
    statements_b = as_statement_graph(graph_b)

    matched = ground_match(statements_a, statements_b, options.canonicalize_literals)
    if matched is None:
        return None
    side_a, side_b = matched
    if len(side_a.nodes) != len(side_b.nodes):
        _logger.debug(
            "Blank node counts differ: %d != %d", len(side_a.nodes), len(side_b.nodes)
        )
        return None

    _logger.debug(
        "Searching for a bijection of %d blank nodes in %d statements",
        len(side_a.nodes),
        len(side_a.statements),
    )
    return refine(
        side_a.statements,
        side_a.nodes,
        side_b.statements,
        side_b.nodes,
        {},
        {},
        options,
    )


def is_isomorphic(
    graph_a: GraphLike, graph_b: GraphLike, options: Optional[IsomorphismOptions] = None
) -> bool:
    return bijection(graph_a, graph_b, options) is not None


class Isomorphic:
    """Mixin for rdflib graphs that can be compared to other graphs."""

    def isomorphic_with(
        self, other: GraphLike, options: Optional[IsomorphismOptions] = None
    ) -> bool:
        return is_isomorphic(cast(GraphLike, self), other, options)

    def bijection_to(
        self, other: GraphLike, options: Optional[IsomorphismOptions] = None
    ) -> Optional[BijectionType]:
        return bijection(cast(GraphLike, self), other, options)


class IsomorphicGraph(Isomorphic, Graph):
    pass


class IsomorphicDataset(Isomorphic, Dataset):
    pass
