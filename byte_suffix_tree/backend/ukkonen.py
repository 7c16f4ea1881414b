'''Ukkonen's online suffix tree construction over a byte payload.

`extend` runs one phase of the algorithm: it makes every pending suffix of
`payload[:new_end + 1]` present in the tree, splitting edges and attaching
implicit leaves as needed, and returns the active point for the next phase.
`build` allocates the two sentinel nodes and runs one phase per payload byte.

Rules applied inside a phase, for the pending suffix at the cursor:

- Rule 2 (extension): the new byte does not follow the pending suffix yet.
  A leaf is attached, either directly under the cursor node or under a new
  inner node created by splitting the edge at the mismatch.
- Rule 3 (already present): the new byte already follows the pending suffix.
  Every shorter pending suffix is then present too, so the phase ends.

After a Rule-2 step the cursor moves to the next shorter suffix through the
suffix link of its node. From ROOT that link is TOP, whose every child is
ROOT through a one-byte edge, so dropping the first pending byte needs no
special case.

Functions:
    as_payload: Normalizes a bytes-like object into an immutable `bytes` buffer.
    extend: Runs one phase for the byte at offset `new_end`.
    build: Builds the arena for a whole payload.
'''
import sys

from ..errors import CapacityError, check
from . import node_ref
from .arena import ROOT, TOP, Arena
from .cursor import Cursor, canonicalize

# Offsets up to len(payload) and node indices up to len(payload) + 1 must be
# encodable.
MAX_PAYLOAD_LENGTH = node_ref.MAX_VALUE - 1

PROGRESS_INTERVAL = 1 << 20


def as_payload(data) -> bytes:
    """Returns `data` as an immutable `bytes` buffer.

    `bytes` objects are returned unchanged (shared, not copied). Mutable
    bytes-like objects (`bytearray`, `memoryview`, arrays) are copied once so
    later writes by the caller can't corrupt the tree.

    Raises:
        TypeError: If `data` is a `str` or is not bytes-like.
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        raise TypeError("Payload must be bytes-like, not str. Encode the text first.")
    try:
        return bytes(memoryview(data))
    except TypeError:
        raise TypeError(f"Payload must be bytes-like, got {type(data).__name__}.") from None


def _split_edge(arena: Arena, payload: bytes, parent: int, edge_byte: int,
                edge_code: int, label_begin: int, split_pos: int) -> int:
    """Splits the edge under `parent` selected by `edge_byte` at `split_pos`.

    The new inner node is labelled `payload[label_begin:split_pos]` and takes
    over the edge's old target as its child keyed by `payload[split_pos]`.

    Returns:
        The arena index of the new inner node.
    """
    split_byte = payload[split_pos]
    if node_ref.is_leaf(edge_code):
        moved = node_ref.leaf(split_pos)
    else:
        target = arena[node_ref.value_of(edge_code)]
        check(target.begin < split_pos < target.end,
              f"Split offset {split_pos} is outside the label [{target.begin}, {target.end}).")
        moved = edge_code

    node = arena.new_node(label_begin, split_pos, node_ref.inner(ROOT))
    node.children.set(split_byte, moved)
    # Allocate before touching existing nodes: a capacity failure leaves the
    # tree as it was.
    index = arena.allocate(node)
    new_code = node_ref.inner(index)

    if node_ref.is_inner(edge_code):
        arena[node_ref.value_of(edge_code)].begin = split_pos
    arena[parent].children.set(edge_byte, new_code)
    return index


def extend(arena: Arena, payload: bytes, cursor: Cursor, new_end: int) -> Cursor:
    """Runs one Ukkonen phase for the byte at `payload[new_end]`.

    Args:
        arena: The arena being built. Mutated in place.
        payload: The payload buffer.
        cursor: Active point returned by the previous phase. Mutated in place.
        new_end: Offset of the byte being added.

    Returns:
        The active point to pass to the phase for `new_end + 1`.

    Raises:
        CapacityError: If a new offset or node index is not encodable.
        InternalConsistencyError: If an invariant of the tree is violated.
    """
    new_byte = payload[new_end]
    # Insertion point of the previous Rule-2 step in this phase, waiting for
    # its suffix link.
    previous: int | None = None

    while True:
        canonicalize(arena, payload, cursor, new_end)
        node = arena[cursor.node]

        if cursor.pos == new_end:
            if not node_ref.is_none(node.children.get(new_byte)):
                break
            insert_index = cursor.node
        else:
            edge_byte = payload[cursor.pos]
            edge_code = node.children.get(edge_byte)
            check(not node_ref.is_none(edge_code),
                  f"Node {cursor.node} has no edge for byte {edge_byte} at offset {cursor.pos}.")
            if node_ref.is_leaf(edge_code):
                label_begin = node_ref.value_of(edge_code)
            else:
                label_begin = arena[node_ref.value_of(edge_code)].begin
            split_pos = label_begin + new_end - cursor.pos
            if payload[split_pos] == new_byte:
                break
            insert_index = _split_edge(arena, payload, cursor.node, edge_byte,
                                       edge_code, label_begin, split_pos)

        if previous is not None:
            arena[previous].suffix = node_ref.inner(insert_index)
        previous = insert_index

        insert_node = arena[insert_index]
        check(node_ref.is_none(insert_node.children.get(new_byte)),
              f"Node {insert_index} already has a child for byte {new_byte}.")
        insert_node.children.set(new_byte, node_ref.leaf(new_end))

        suffix = node.suffix
        check(node_ref.is_inner(suffix),
              f"Suffix link of node {cursor.node} does not point to an inner node.")
        cursor.node = node_ref.value_of(suffix)

    # A Rule-3 stop at an explicit node is the suffix-link target of the last
    # insertion point.
    if previous is not None and cursor.pos == new_end:
        arena[previous].suffix = node_ref.inner(cursor.node)
    return cursor


def build(payload, child_table: str = 'dense', verbose: bool = False) -> Arena:
    """Builds the suffix tree arena for `payload`.

    Args:
        payload: A bytes-like object. A final byte that occurs nowhere else in
                 the payload makes every suffix end at its own leaf.
        child_table: Child table strategy, 'dense' or 'sparse'.
        verbose: If True, prints progress messages to stderr.

    Returns:
        The finished Arena. Index TOP and ROOT hold the sentinel nodes.

    Raises:
        TypeError: If `payload` is not bytes-like.
        ValueError: If `child_table` is unknown.
        CapacityError: If the payload is longer than MAX_PAYLOAD_LENGTH.
        InternalConsistencyError: If the construction detects a broken invariant.
    """
    payload = as_payload(payload)
    length = len(payload)
    if length > MAX_PAYLOAD_LENGTH:
        raise CapacityError(
            f"Payload of {length} bytes exceeds the maximum of {MAX_PAYLOAD_LENGTH} bytes."
        )

    arena = Arena(child_table)
    if verbose:
        print(f"Building suffix tree for {length} bytes ({child_table} child tables)...", file=sys.stderr)
        if length and payload.count(payload[-1]) > 1:
            print("Warning: the last byte of the payload is not unique; "
                  "some suffixes will end inside the tree instead of at a leaf.", file=sys.stderr)

    # TOP's suffix link is never followed; every byte leads from TOP to ROOT.
    top = arena.allocate(arena.new_node(0, 0, node_ref.NONE, fill=node_ref.inner(ROOT)))
    root = arena.allocate(arena.new_node(0, 1, node_ref.inner(TOP)))
    check(top == TOP and root == ROOT, "Sentinel nodes were not allocated at indices 0 and 1.")

    cursor = Cursor(ROOT, 0)
    for i in range(length):
        cursor = extend(arena, payload, cursor, i)
        if verbose and (i + 1) % PROGRESS_INTERVAL == 0:
            print(f"  processed {i + 1}/{length} bytes, {len(arena)} inner nodes", file=sys.stderr)

    if verbose:
        print(f"Suffix tree finished: {len(arena)} inner nodes (including 2 sentinels).", file=sys.stderr)
    return arena
