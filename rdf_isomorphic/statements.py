"""Adapt rdflib graphs and plain statement collections to a countable statement set."""

import logging
from typing import Dict, Iterable, List, Optional, Set, Union

from rdflib.graph import DATASET_DEFAULT_GRAPH_ID, ConjunctiveGraph, Dataset, Graph
from rdflib.term import Node

from .exceptions import UnsupportedTermException
from .terms import term_kind
from .utils import Statement

_logger = logging.getLogger("isomorphic")

GraphLike = Union[Graph, "StatementGraph", Iterable[Statement]]


class StatementGraph:
    """
    A finite set of statements with count and containment queries.

    Statements are 3-tuples, or 4-tuples when they belong to a named graph.
    ``all_statements`` keeps the order in which statements were first seen.
    """

    def __init__(self, statements: Iterable[Statement]) -> None:
        self._statements = {}  # type: Dict[Statement, bool]
        for statement in statements:
            if len(statement) not in (3, 4):
                raise UnsupportedTermException(
                    f"Statements must have 3 or 4 components, got {statement!r}"
                )
            for term in statement:
                term_kind(term)
            self._statements[tuple(statement)] = True

    def count(self) -> int:
        return len(self._statements)

    def all_statements(self) -> List[Statement]:
        return list(self._statements)

    def contains(self, statement: Statement) -> bool:
        return tuple(statement) in self._statements

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, statement: object) -> bool:
        return isinstance(statement, tuple) and self.contains(statement)

    def __repr__(self) -> str:
        return f"<StatementGraph with {self.count()} statements>"


def _graph_name(context: object, default_names: Set[Node]) -> Optional[Node]:
    if isinstance(context, Graph):
        context = context.identifier
    if context is None:
        return None
    if not isinstance(context, Node):
        raise UnsupportedTermException(
            f"Unsupported graph name {context!r} of type {type(context).__name__}"
        )
    return None if context in default_names else context


def _quads(graph: ConjunctiveGraph) -> Iterable[Statement]:
    default_names = {DATASET_DEFAULT_GRAPH_ID}  # type: Set[Node]
    if not isinstance(graph, Dataset):
        default_names.add(graph.default_context.identifier)
    for s, p, o, context in graph.quads((None, None, None, None)):
        name = _graph_name(context, default_names)
        if name is None:
            yield (s, p, o)
        else:
            yield (s, p, o, name)


def as_statement_graph(graph: GraphLike) -> StatementGraph:
    """Wrap an rdflib graph, a dataset or an iterable of tuples."""
    if isinstance(graph, StatementGraph):
        return graph
    if isinstance(graph, ConjunctiveGraph):
        result = StatementGraph(_quads(graph))
    elif isinstance(graph, Graph):
        result = StatementGraph(graph.triples((None, None, None)))
    else:
        result = StatementGraph(graph)
    _logger.debug("Collected %d statements from %r", result.count(), graph)
    return result
