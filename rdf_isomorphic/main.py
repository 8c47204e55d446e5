"""Command line interface to rdf-isomorphic."""

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from typing import List, Optional

from .exceptions import GraphLoadException
from .isomorphic import IsomorphismOptions, bijection
from .loader import load_graph
from .utils import bijection_to_json, json_dumps

_logger = logging.getLogger("isomorphic")


def arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check whether two RDF graphs are the same up to blank node names."
    )
    parser.add_argument(
        "--format",
        type=str,
        default=None,
        help="RDF serialization of both graphs (one of turtle, nt, nquads, trig, "
        "xml, n3, json-ld); guessed from the file suffix by default",
    )
    parser.add_argument(
        "--canonicalize-literals",
        action="store_true",
        default=False,
        help="Compare literals by their canonical lexical form",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=None,
        metavar="N",
        help="Give up a search branch after N speculative blank node pairings",
    )
    parser.add_argument(
        "--no-doc-cache",
        action="store_false",
        default=True,
        dest="doc_cache",
        help="Do not cache graphs fetched over HTTP",
    )
    parser.add_argument(
        "--print-bijection",
        action="store_true",
        default=False,
        help="Print the blank node mapping as JSON when the graphs are isomorphic",
    )

    exgroup_volume = parser.add_mutually_exclusive_group()
    exgroup_volume.add_argument("--verbose", action="store_true", help="Default logging")
    exgroup_volume.add_argument(
        "--quiet", action="store_true", help="Only print warnings and errors."
    )
    exgroup_volume.add_argument(
        "--debug", action="store_true", help="Print even more logging"
    )

    parser.add_argument("graph_a", type=str, nargs="?", default=None)
    parser.add_argument("graph_b", type=str, nargs="?", default=None)
    parser.add_argument(
        "--version", "-v", action="store_true", help="Print version", default=None
    )
    return parser


def main(argsl: Optional[List[str]] = None) -> int:
    if argsl is None:
        argsl = sys.argv[1:]

    parser = arg_parser()
    args = parser.parse_args(argsl)

    if args.quiet:
        _logger.setLevel(logging.WARN)
    if args.debug:
        _logger.setLevel(logging.DEBUG)

    if args.version:
        try:
            pkg_version = version("rdf-isomorphic")
        except PackageNotFoundError:
            pkg_version = "unknown"
        print(f"{sys.argv[0]} Current version: {pkg_version}")
        return 0

    if args.graph_a is None or args.graph_b is None:
        parser.print_help(sys.stderr)
        _logger.error("Error: too few arguments")
        return 2

    try:
        graph_a = load_graph(args.graph_a, args.format, doc_cache=args.doc_cache)
        graph_b = load_graph(args.graph_b, args.format, doc_cache=args.doc_cache)
    except GraphLoadException as e:
        _logger.error(
            "Unable to load graph:\n%s", str(e), exc_info=(True if args.debug else False)
        )
        return 2

    options = IsomorphismOptions(
        canonicalize_literals=args.canonicalize_literals, max_depth=args.max_depth
    )
    mapping = bijection(graph_a, graph_b, options)
    if mapping is None:
        print(f"Graphs `{args.graph_a}` and `{args.graph_b}` are not isomorphic")
        return 1

    if args.print_bijection:
        print(json_dumps(bijection_to_json(mapping), indent=4, sort_keys=True))
    else:
        print(f"Graphs `{args.graph_a}` and `{args.graph_b}` are isomorphic")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
