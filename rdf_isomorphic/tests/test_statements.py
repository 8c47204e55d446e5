import pytest
from rdflib import BNode, Dataset, Graph, Literal, Variable

from rdf_isomorphic.exceptions import UnsupportedTermException
from rdf_isomorphic.statements import StatementGraph, _graph_name, as_statement_graph
from rdf_isomorphic.terms import (
    BLANK,
    IRI,
    LITERAL,
    blank_nodes_in,
    canonical_term,
    has_blank_nodes,
    term_kind,
    term_string,
)

from .util import ex, integer


def test_term_kinds() -> None:
    assert term_kind(ex("s")) == IRI
    assert term_kind(Literal("v")) == LITERAL
    assert term_kind(BNode()) == BLANK
    with pytest.raises(UnsupportedTermException):
        term_kind(Variable("v"))


def test_term_strings() -> None:
    assert term_string(ex("s")) == "<http://example.org/s>"
    assert term_string(integer("01")) != term_string(integer("1"))
    assert term_string(integer("01"), True) == term_string(integer("1"))
    assert term_string(Literal("not a number", datatype=integer("1").datatype), True)
    assert canonical_term(ex("s")) == ex("s")
    with pytest.raises(UnsupportedTermException):
        term_string(BNode())


def test_blank_nodes() -> None:
    x, y = BNode(), BNode()
    assert has_blank_nodes((ex("s"), ex("p"), x))
    assert not has_blank_nodes((ex("s"), ex("p"), ex("o"), ex("g")))
    assert blank_nodes_in([(x, ex("p"), y), (y, ex("p"), x), (ex("s"), ex("p"), y)]) == [x, y]


def test_statement_graph() -> None:
    x = BNode()
    statements = StatementGraph(
        [(ex("s"), ex("p"), x), (ex("s"), ex("p"), x), (x, ex("q"), ex("o"), ex("g"))]
    )
    assert statements.count() == 2
    assert len(statements) == 2
    assert statements.contains((ex("s"), ex("p"), x))
    assert not statements.contains((ex("s"), ex("p"), x, ex("g")))
    assert (x, ex("q"), ex("o"), ex("g")) in statements
    assert statements.all_statements()[0] == (ex("s"), ex("p"), x)


def test_statement_graph_rejects_bad_statements() -> None:
    with pytest.raises(UnsupportedTermException, match="Unsupported graph name"):
        _graph_name("g", set())
    with pytest.raises(UnsupportedTermException):
        StatementGraph([(ex("s"), ex("p"))])
    with pytest.raises(UnsupportedTermException):
        StatementGraph([(ex("s"), ex("p"), Variable("o"))])


def test_from_rdflib() -> None:
    g = Graph()
    g.add((ex("s"), ex("p"), Literal("v")))
    assert as_statement_graph(g).all_statements() == [(ex("s"), ex("p"), Literal("v"))]

    ds = Dataset()
    ds.add((ex("s"), ex("p"), Literal("default")))
    ds.graph(ex("g")).add((ex("s"), ex("p"), Literal("named")))
    statements = as_statement_graph(ds)
    assert statements.count() == 2
    assert statements.contains((ex("s"), ex("p"), Literal("default")))
    assert statements.contains((ex("s"), ex("p"), Literal("named"), ex("g")))

    wrapped = StatementGraph([])
    assert as_statement_graph(wrapped) is wrapped
