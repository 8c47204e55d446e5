"""Load graphs from files and URLs into rdflib."""

import logging
import os
import pathlib
import tempfile
import threading
import urllib.parse
import urllib.request
from contextlib import contextmanager
from typing import Iterator, Optional, Union

import rdflib
import requests
from cachecontrol.caches import FileCache
from cachecontrol.wrapper import CacheControl
from rdflib.graph import Dataset, Graph
from rdflib.util import FORMAT_MIMETYPE_MAP, guess_format

from .exceptions import GraphLoadException
from .fetcher import DefaultFetcher, Fetcher

_logger = logging.getLogger("isomorphic")
_normalize_lock = threading.Lock()

QUAD_FORMATS = ("nquads", "trig", "trix")


def file_uri(path: str) -> str:
    if path.startswith("file://"):
        return path
    urlpath = urllib.request.pathname2url(path)
    if urlpath.startswith("//"):
        return f"file:{urlpath}"
    return f"file://{urlpath}"


def location_uri(location: str) -> str:
    """Turn a path or URL into a URL the fetcher understands."""
    if urllib.parse.urlsplit(location).scheme in ("http", "https", "file"):
        return location
    return file_uri(os.path.abspath(location))


def make_session(doc_cache: Union[str, bool] = True) -> requests.sessions.Session:
    """
    Build the HTTP session used to fetch remote graphs.

    ``doc_cache`` is ``True`` for a file cache under ``~/.cache/isomorphic``,
    a directory name for a file cache there, or ``False`` for no caching.
    """
    if doc_cache is False:
        return requests.Session()
    if doc_cache is True:
        root = pathlib.Path(os.environ.get("HOME", tempfile.gettempdir()))
        return CacheControl(
            requests.Session(),
            cache=FileCache(root / ".cache" / "isomorphic"),
        )
    return CacheControl(requests.Session(), cache=FileCache(doc_cache))


@contextmanager
def preserve_lexical_forms() -> Iterator[None]:
    """
    Keep literal lexical forms as written while parsing, e.g. ``"01"^^xsd:integer``.

    This flips rdflib's process-wide ``NORMALIZE_LITERALS`` flag.  Loads are
    serialized on a lock so the flag is always restored, but literals built by
    other threads while a load is running are not normalized either.
    """
    with _normalize_lock:
        previous = rdflib.NORMALIZE_LITERALS
        rdflib.NORMALIZE_LITERALS = False
        try:
            yield
        finally:
            rdflib.NORMALIZE_LITERALS = previous


def load_graph(
    location: str,
    format: Optional[str] = None,
    fetcher: Optional[Fetcher] = None,
    doc_cache: Union[str, bool] = True,
) -> Graph:
    """
    Parse the graph at ``location``, a local path or URL.

    The format is guessed from the file suffix when not given.  Quad formats
    are loaded into an :class:`rdflib.Dataset`.  Not safe to call from
    several threads at once if those threads also build literals.
    """
    url = location_uri(location)
    fmt = format or guess_format(urllib.parse.urlsplit(url).path)
    if fmt is None:
        raise GraphLoadException(
            "Unable to guess the format, use --format to give one", location
        )
    if fetcher is None:
        fetcher = DefaultFetcher({}, make_session(doc_cache))

    text = fetcher.fetch_text(url, FORMAT_MIMETYPE_MAP.get(fmt))
    graph = Dataset() if fmt in QUAD_FORMATS else Graph()
    try:
        with preserve_lexical_forms():
            graph.parse(data=text, format=fmt, publicID=url)
    except Exception as e:
        raise GraphLoadException(f"Unable to parse as {fmt}: {e}", location) from e

    _logger.debug("Loaded %d statements from %s", len(graph), url)
    return graph
