'''Active point of Ukkonen's construction and its canonicalization.

The cursor names the deepest explicit node reached so far (`node`) and the
payload offset `pos` where the not-yet-consumed tail begins: the pending
suffix is the string of `node` followed by `payload[pos:new_end]`.

`pos` never decreases over a whole construction, so the total number of
descents done by `canonicalize` is bounded by the payload length.
'''
from ..errors import check
from . import node_ref
from .arena import TOP, Arena


class Cursor:
    """Active point: an arena index and the offset of the unconsumed tail.

    Attributes:
        node (int): Arena index of the last explicitly reached node.
        pos (int): Payload offset where the unconsumed tail starts.
    """
    __slots__ = ('node', 'pos')

    def __init__(self, node: int, pos: int):
        self.node = node
        self.pos = pos

    def __eq__(self, other) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return self.node == other.node and self.pos == other.pos

    def __repr__(self) -> str:
        return f"Cursor(node={self.node}, pos={self.pos})"


def canonicalize(arena: Arena, payload: bytes, cursor: Cursor, new_end: int) -> Cursor:
    """Moves `cursor` down to the deepest node its tail fully spans.

    Descends while the child selected by `payload[cursor.pos]` is an inner node
    whose whole edge label fits in `payload[cursor.pos:new_end]`. Stops at a
    leaf or missing child, or when the match ends inside the next edge.

    Args:
        arena: The arena being built.
        payload: The payload buffer.
        cursor: The cursor to canonicalize. Modified in place.
        new_end: Offset of the byte being added in the current phase.

    Returns:
        The same `cursor` object, for chaining.
    """
    while cursor.pos < new_end:
        code = arena[cursor.node].children.get(payload[cursor.pos])
        if not node_ref.is_inner(code):
            # Leaves absorb the rest of the string and can't be descended;
            # a missing child means a mismatch is about to be found.
            break
        index = node_ref.value_of(code)
        check(index != TOP, f"Child of node {cursor.node} points back at the top sentinel.")
        length = arena[index].label_length()
        if length > new_end - cursor.pos:
            break
        cursor.node = index
        cursor.pos += length
    return cursor
