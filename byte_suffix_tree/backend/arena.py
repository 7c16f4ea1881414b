'''Append-only storage for the inner nodes of a suffix tree.

Leaves are never stored here: an implicit leaf is only a reference (see
`node_ref.leaf`). Every inner node lives in an `Arena` and is addressed by
its integer index, which stays valid for the lifetime of the tree.

The child table of a node maps a byte value to an encoded reference. Two
interchangeable strategies are provided:

- `DenseChildren`: a 256-slot `np.int32` row, O(1) lookup, 1 KiB per node.
- `SparseChildren`: a dict holding only the occupied slots.

Both expose the same small interface (`get`, `set`, `items`, `__len__`,
`as_row`), and a tree built with either is identical field for field.

Classes:
    DenseChildren: numpy-backed 256-slot child table.
    SparseChildren: dict-backed child table.
    Node: An inner node (edge label range, suffix link, children).
    Arena: Index-addressed, append-only collection of Nodes.
'''
import numpy as np

from ..errors import CapacityError
from . import node_ref

ALPHABET_SIZE = 256

# Sentinel node indices. TOP is the parent of ROOT on every byte value.
TOP = 0
ROOT = 1


class DenseChildren:
    """Child table stored as a full 256-entry `np.int32` row."""
    __slots__ = ('slots',)

    def __init__(self, fill: int = node_ref.NONE):
        self.slots = np.full(ALPHABET_SIZE, fill, dtype=np.int32)

    def get(self, byte: int) -> int:
        return int(self.slots[byte])

    def set(self, byte: int, code: int) -> None:
        self.slots[byte] = code

    def items(self) -> list[tuple[int, int]]:
        """Returns occupied `(byte, code)` pairs in ascending byte order."""
        return [(int(b), int(self.slots[b])) for b in np.flatnonzero(self.slots)]

    def as_row(self) -> np.ndarray:
        return self.slots.copy()

    def __len__(self) -> int:
        return int(np.count_nonzero(self.slots))


class SparseChildren:
    """Child table stored as a dict holding only occupied slots."""
    __slots__ = ('slots',)

    def __init__(self, fill: int = node_ref.NONE):
        if fill == node_ref.NONE:
            self.slots: dict[int, int] = {}
        else:
            self.slots = {b: fill for b in range(ALPHABET_SIZE)}

    def get(self, byte: int) -> int:
        return self.slots.get(byte, node_ref.NONE)

    def set(self, byte: int, code: int) -> None:
        if code == node_ref.NONE:
            self.slots.pop(byte, None)
        else:
            self.slots[byte] = code

    def items(self) -> list[tuple[int, int]]:
        """Returns occupied `(byte, code)` pairs in ascending byte order."""
        return sorted(self.slots.items())

    def as_row(self) -> np.ndarray:
        row = np.zeros(ALPHABET_SIZE, dtype=np.int32)
        for byte, code in self.slots.items():
            row[byte] = code
        return row

    def __len__(self) -> int:
        return len(self.slots)


CHILD_TABLES = {
    'dense': DenseChildren,
    'sparse': SparseChildren,
}


class Node:
    """An inner node of the suffix tree.

    Attributes:
        begin (int): Start offset (inclusive) of the label on the edge from the
                     parent.
        end (int): End offset (exclusive) of that label. `begin < end` for
                   every node except TOP.
        suffix (int): Encoded suffix-link reference. Always an inner reference,
                      except on TOP where it is unused.
        children (DenseChildren | SparseChildren): Child references keyed by
                      the first byte of their edge label.
    """
    __slots__ = ('begin', 'end', 'suffix', 'children')

    def __init__(self, begin: int, end: int, suffix: int, children):
        self.begin = begin
        self.end = end
        self.suffix = suffix
        self.children = children

    def label_length(self) -> int:
        return self.end - self.begin

    def __repr__(self) -> str:
        return (f"Node(begin={self.begin}, end={self.end}, "
                f"suffix={node_ref.decode(self.suffix)!r}, children={len(self.children)})")


class Arena:
    """Append-only, index-addressed collection of inner nodes.

    Indices are handed out in allocation order starting at 0 and are never
    reused; there is no removal operation.

    Attributes:
        child_table (str): Name of the child-table strategy ('dense' or 'sparse').
    """
    def __init__(self, child_table: str = 'dense'):
        """Initializes an empty Arena.

        Args:
            child_table: 'dense' or 'sparse'. See the module docstring.

        Raises:
            ValueError: If `child_table` is not a known strategy name.
        """
        if child_table not in CHILD_TABLES:
            raise ValueError(
                f"Unknown child table '{child_table}'. Choose one of: {', '.join(sorted(CHILD_TABLES))}."
            )
        self.child_table = child_table
        self._children_cls = CHILD_TABLES[child_table]
        self._nodes: list[Node] = []

    def new_children(self, fill: int = node_ref.NONE):
        """Returns an empty child table of this arena's strategy."""
        return self._children_cls(fill)

    def new_node(self, begin: int, end: int, suffix: int, fill: int = node_ref.NONE) -> Node:
        return Node(begin, end, suffix, self.new_children(fill))

    def allocate(self, node: Node) -> int:
        """Appends `node` and returns its index.

        Raises:
            CapacityError: If the new index could not be encoded as a reference.
                           Nothing is appended in that case.
        """
        index = len(self._nodes)
        if index > node_ref.MAX_VALUE:
            raise CapacityError(
                f"Arena is full: node index {index} exceeds {node_ref.MAX_VALUE}."
            )
        self._nodes.append(node)
        return index

    def get(self, index: int) -> Node:
        """Returns the node at `index`. The node is live: mutations are visible."""
        if index < 0:
            raise IndexError(f"Node index {index} is negative.")
        return self._nodes[index]

    __getitem__ = get

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self):
        return iter(self._nodes)

    def snapshot(self) -> dict[str, np.ndarray]:
        """Copies every node field into numpy arrays.

        Returns:
            A dict with 'begin', 'end' and 'suffix' arrays of shape `(len(self),)`
            and a 'children' array of shape `(len(self), 256)`, all `np.int64`
            except 'children' which is `np.int32`.
        """
        count = len(self._nodes)
        children = np.zeros((count, ALPHABET_SIZE), dtype=np.int32)
        for i, node in enumerate(self._nodes):
            children[i] = node.children.as_row()
        return {
            'begin': np.array([n.begin for n in self._nodes], dtype=np.int64),
            'end': np.array([n.end for n in self._nodes], dtype=np.int64),
            'suffix': np.array([n.suffix for n in self._nodes], dtype=np.int64),
            'children': children,
        }
