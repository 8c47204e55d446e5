from typing import Optional


class IsomorphicException(Exception):
    """Base class for all rdf-isomorphic exceptions."""

    def __init__(self, msg: str, location: Optional[str] = None) -> None:
        super().__init__(msg)
        self.message = self.args[0]
        self.location = location  # type: Optional[str]

    def prefix(self) -> str:
        return f"{self.location}: " if self.location else ""

    def __str__(self) -> str:
        return f"{self.prefix()}{self.message}"


class GraphLoadException(IsomorphicException):
    """Indicates a graph could not be fetched or parsed."""


class UnsupportedTermException(IsomorphicException):
    """Indicates a statement component that is not an IRI, literal or blank node."""
