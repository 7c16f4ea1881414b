'''Compact integer encoding for child and suffix-link references.

A reference is one of three things: nothing, an implicit leaf starting at a
payload offset, or an inner node at an arena index. The construction core
stores references as plain non-negative integers so that a node's 256-slot
child table can live in a single `np.int32` row.

Bit layout of an encoded reference::

    code = (value << TAG_BITS) | tag

    tag == TAG_NONE  (0)  -> no reference; value is always 0, so NONE == 0
    tag == TAG_LEAF  (1)  -> implicit leaf, value is the label's start offset
    tag == TAG_INNER (2)  -> inner node, value is its arena index

`value` must lie in `0..MAX_VALUE`. MAX_VALUE is chosen so that every code
fits in a signed 32-bit integer; values outside that range raise
`CapacityError` instead of wrapping.

`NodeRef` is the decoded, explicit form handed to readers of a finished tree.
'''
from enum import IntEnum
from typing import NamedTuple

from ..errors import CapacityError

TAG_BITS = 2
TAG_MASK = (1 << TAG_BITS) - 1

TAG_NONE = 0
TAG_LEAF = 1
TAG_INNER = 2

# Largest offset or node index an encoded reference can carry.
MAX_VALUE = (2**31 - 1) >> TAG_BITS

NONE = TAG_NONE


class RefKind(IntEnum):
    NONE = TAG_NONE
    LEAF = TAG_LEAF
    INNER = TAG_INNER


class NodeRef(NamedTuple):
    """Decoded reference: a `RefKind` and the offset or index it carries."""
    kind: RefKind
    value: int

    @property
    def is_leaf(self) -> bool:
        return self.kind == RefKind.LEAF

    @property
    def is_inner(self) -> bool:
        return self.kind == RefKind.INNER

    @property
    def is_none(self) -> bool:
        return self.kind == RefKind.NONE

    def __repr__(self) -> str:
        if self.kind == RefKind.NONE:
            return "NodeRef.NONE"
        return f"NodeRef.{self.kind.name}({self.value})"


def _encode(value: int, tag: int) -> int:
    if value < 0 or value > MAX_VALUE:
        raise CapacityError(
            f"Value {value} cannot be encoded in a reference (valid range 0..{MAX_VALUE})."
        )
    return (value << TAG_BITS) | tag


def leaf(offset: int) -> int:
    """Encodes an implicit leaf whose label starts at payload `offset`.

    Raises:
        CapacityError: If `offset` is negative or above MAX_VALUE.
    """
    return _encode(offset, TAG_LEAF)


def inner(index: int) -> int:
    """Encodes a reference to the inner node at arena `index`.

    Raises:
        CapacityError: If `index` is negative or above MAX_VALUE.
    """
    return _encode(index, TAG_INNER)


def is_none(code: int) -> bool:
    return code == NONE


def is_leaf(code: int) -> bool:
    return code & TAG_MASK == TAG_LEAF


def is_inner(code: int) -> bool:
    return code & TAG_MASK == TAG_INNER


def value_of(code: int) -> int:
    """Returns the offset or index carried by `code` (0 for NONE)."""
    return code >> TAG_BITS


def decode(code: int) -> NodeRef:
    """Decodes an integer reference into a `NodeRef`.

    Raises:
        ValueError: If `code` is negative, carries an unknown tag, or is a
                    NONE tag with a non-zero value.
    """
    code = int(code)
    if code < 0:
        raise ValueError(f"Invalid reference code {code}: must be non-negative.")
    tag = code & TAG_MASK
    value = code >> TAG_BITS
    if tag == TAG_NONE:
        if value != 0:
            raise ValueError(f"Invalid reference code {code}: NONE must not carry a value.")
        return NodeRef(RefKind.NONE, 0)
    if tag == TAG_LEAF:
        return NodeRef(RefKind.LEAF, value)
    if tag == TAG_INNER:
        return NodeRef(RefKind.INNER, value)
    raise ValueError(f"Invalid reference code {code}: unknown tag {tag}.")


def encode(ref: NodeRef) -> int:
    """Inverse of `decode`."""
    if ref.kind == RefKind.NONE:
        return NONE
    if ref.kind == RefKind.LEAF:
        return leaf(ref.value)
    return inner(ref.value)
