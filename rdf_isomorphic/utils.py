import json
from typing import Any, Dict, Mapping, MutableSequence, Tuple

from rdflib.term import BNode, Node

Statement = Tuple[Node, ...]
SignatureMap = Dict[BNode, str]
BijectionType = Dict[BNode, BNode]
CacheType = Dict[str, str]


def convert_to_dict(j4):  # type: (Any) -> Any
    if isinstance(j4, Mapping):
        return {k: convert_to_dict(v) for k, v in j4.items()}
    elif isinstance(j4, MutableSequence):
        return [convert_to_dict(v) for v in j4]
    else:
        return j4


def json_dumps(
    obj,  # type: Any
    **kwargs  # type: Any
):  # type: (...) -> str
    """Force use of unicode."""
    return json.dumps(convert_to_dict(obj), **kwargs)


def bijection_to_json(mapping: BijectionType) -> Dict[str, str]:
    """Render a blank node mapping with N3 labels on both sides."""
    return {k.n3(): v.n3() for k, v in mapping.items()}
