"""Shared test functions and attributes."""

import os
from pathlib import Path
from typing import Dict, Iterable, List

from rdflib import BNode, Graph, Literal, URIRef

from rdf_isomorphic.loader import file_uri
from rdf_isomorphic.utils import BijectionType, Statement

EX = "http://example.org/"
XSD_INTEGER = URIRef("http://www.w3.org/2001/XMLSchema#integer")


def get_data(filename: str) -> str:
    """Get the file path for a data file in the ``tests`` directory."""
    filename = os.path.normpath(filename)
    return str((Path(os.path.dirname(__file__)) / filename).resolve())


def get_data_uri(resource_path: str) -> str:
    return file_uri(get_data(resource_path))


def ex(name: str) -> URIRef:
    return URIRef(EX + name)


def integer(lexical: str) -> Literal:
    """An xsd:integer literal that keeps its lexical form as written."""
    return Literal(lexical, datatype=XSD_INTEGER, normalize=False)


def graph_of(statements: Iterable[Statement]) -> Graph:
    g = Graph()
    for statement in statements:
        g.add(statement)
    return g


def rename_blank_nodes(statements: Iterable[Statement]) -> List[Statement]:
    """Give every blank node a fresh identity, consistently across statements."""
    fresh = {}  # type: Dict[BNode, BNode]
    renamed = []
    for statement in statements:
        renamed.append(
            tuple(
                fresh.setdefault(term, BNode()) if isinstance(term, BNode) else term
                for term in statement
            )
        )
    return renamed


def apply_bijection(
    mapping: BijectionType, statements: Iterable[Statement]
) -> List[Statement]:
    return [
        tuple(mapping[term] if isinstance(term, BNode) else term for term in statement)
        for statement in statements
    ]


def assert_witnesses(mapping: BijectionType, graph_a: Graph, graph_b: Graph) -> None:
    """Check that ``mapping`` turns ``graph_a`` into ``graph_b``."""
    assert len(set(mapping.values())) == len(mapping)
    assert set(apply_bijection(mapping, graph_a)) == set(graph_b)
