"""Exception types raised by ekflow.

Structural errors fail the single call that introduced them. A sink that
cannot be reached from the source is normal termination and has no
exception type.
"""

from __future__ import annotations


class EkflowError(Exception):
    """Base class for all ekflow errors."""


class InvalidNodeError(EkflowError, IndexError):
    """A node index lies outside ``[0, num_nodes)``.

    Attributes:
        node: The offending index.
        num_nodes: Size of the network the index was checked against.
    """

    def __init__(self, node: object, num_nodes: int, role: str = "node") -> None:
        self.node = node
        self.num_nodes = num_nodes
        self.role = role
        super().__init__(
            f"Invalid {role} index {node!r}: expected an integer in [0, {num_nodes})."
        )


class NetworkFormatError(EkflowError, ValueError):
    """A network description cannot be turned into a network at all."""


class NetworkFileNotFoundError(EkflowError, FileNotFoundError):
    """A network description file could not be located or opened."""
