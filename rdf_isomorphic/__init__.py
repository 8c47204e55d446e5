"""Isomorphism and blank node bijections for RDF graphs."""

import logging

__author__ = "rdf-isomorphic contributors"

_logger = logging.getLogger("isomorphic")
_logger.addHandler(logging.StreamHandler())
_logger.setLevel(logging.INFO)

from .isomorphic import (  # noqa: E402
    Isomorphic,
    IsomorphicDataset,
    IsomorphicGraph,
    IsomorphismOptions,
    bijection,
    is_isomorphic,
)

__all__ = [
    "Isomorphic",
    "IsomorphicDataset",
    "IsomorphicGraph",
    "IsomorphismOptions",
    "bijection",
    "is_isomorphic",
]
