'''Read-only view over a finished byte suffix tree.

This module provides the `SuffixTree` class, which builds the tree for a byte
payload with Ukkonen's algorithm (see `backend.ukkonen`) and then exposes the
finished structure to callers:

- Structure: `children`, `label`, `label_bytes`, `suffix_link`, `leaf_bytes`.
- Enumeration: `walk`, `leaves`, `suffixes`, `node_count`, `leaf_count`.
- Diagnostics: `render`/`display` (indented text dump), `display_graphviz`
  (requires the optional `graphviz` library), `snapshot` (numpy arrays of
  every node field).

The tree never changes after construction, so any number of readers may use
it concurrently. It keeps a single reference to the payload buffer; every
label is a pair of offsets into it.

Running this module as a script builds and prints the tree for its first
argument, or for "bananas$" when none is given.
'''
import sys
from collections.abc import Iterator

import numpy as np

from .backend import node_ref
from .backend.arena import ROOT, Arena
from .backend.node_ref import NodeRef
from .backend.ukkonen import as_payload, build


class SuffixTree:
    """A suffix tree over a fixed byte payload.

    Attributes:
        payload (bytes): The immutable buffer every label points into.
        arena (Arena): The inner nodes. Index 0 is the top sentinel, index 1
                       the root.
    """
    def __init__(self, payload=b"", child_table: str = 'dense', verbose: bool = False):
        """Builds the suffix tree for `payload`.

        Args:
            payload: A bytes-like object. `bytes` are shared; mutable buffers are
                     copied once. End it with a byte that occurs nowhere else to
                     get one leaf per suffix.
            child_table: 'dense' (numpy 256-slot rows) or 'sparse' (dicts).
            verbose: If True, prints construction progress to stderr.

        Raises:
            TypeError: If `payload` is not bytes-like.
            ValueError: If `child_table` is unknown.
            CapacityError: If the payload is too long for the reference encoding.
            InternalConsistencyError: If construction detects a broken invariant.
        """
        self.payload: bytes = as_payload(payload)
        self.arena: Arena = build(self.payload, child_table=child_table, verbose=verbose)

    def __len__(self) -> int:
        return len(self.payload)

    @property
    def root(self) -> NodeRef:
        return NodeRef(node_ref.RefKind.INNER, ROOT)

    @property
    def node_count(self) -> int:
        """int: Number of inner nodes, including the two sentinels."""
        return len(self.arena)

    @property
    def leaf_count(self) -> int:
        """int: Number of implicit leaves reachable from the root."""
        return sum(1 for _, _, _, ref in self.walk() if ref.is_leaf)

    def children(self, index: int) -> list[tuple[int, NodeRef]]:
        """Returns the `(byte, NodeRef)` children of inner node `index` in byte order."""
        return [(byte, node_ref.decode(code)) for byte, code in self.arena[index].children.items()]

    def label(self, index: int) -> tuple[int, int]:
        """Returns the half-open payload range labelling the edge into inner node `index`."""
        node = self.arena[index]
        return node.begin, node.end

    def label_range(self, ref: NodeRef) -> tuple[int, int]:
        """Returns the label range of an inner or leaf reference.

        A leaf's label runs from its stored offset to the end of the payload.
        """
        if ref.is_leaf:
            return ref.value, len(self.payload)
        if ref.is_inner:
            return self.label(ref.value)
        raise ValueError("An absent reference has no label.")

    def label_bytes(self, ref: NodeRef) -> bytes:
        begin, end = self.label_range(ref)
        return self.payload[begin:end]

    def leaf_bytes(self, ref: NodeRef) -> bytes:
        """Resolves an implicit leaf into the bytes from its offset to the current end."""
        if not ref.is_leaf:
            raise ValueError(f"{ref!r} is not a leaf reference.")
        return self.payload[ref.value:]

    def suffix_link(self, index: int) -> NodeRef:
        return node_ref.decode(self.arena[index].suffix)

    def walk(self) -> Iterator[tuple[int, int, int | None, NodeRef]]:
        """Iterates the tree in pre-order, children in ascending byte order.

        Uses an explicit stack, so arbitrarily deep trees are fine.

        Yields:
            `(depth, string_depth, byte, ref)` tuples. `depth` counts edges from
            the root, `string_depth` is the length of the string spelled by the
            path down to (but excluding) `ref`'s own label, and `byte` is the
            key of `ref` in its parent (None for the root).
        """
        stack: list[tuple[int, int, int | None, NodeRef]] = [(0, 0, None, self.root)]
        while stack:
            depth, string_depth, byte, ref = stack.pop()
            yield depth, string_depth, byte, ref
            if not ref.is_inner:
                continue
            if ref.value == ROOT:
                child_string_depth = 0
            else:
                begin, end = self.label(ref.value)
                child_string_depth = string_depth + end - begin
            for child_byte, child in reversed(self.children(ref.value)):
                stack.append((depth + 1, child_string_depth, child_byte, child))

    def leaves(self) -> Iterator[tuple[int, NodeRef]]:
        """Yields `(suffix_start, leaf_ref)` for every leaf.

        `suffix_start` is the payload offset of the suffix the leaf spells:
        the path from the root to the leaf reads `payload[suffix_start:]`.
        """
        for _, string_depth, _, ref in self.walk():
            if ref.is_leaf:
                yield ref.value - string_depth, ref

    def suffixes(self) -> list[bytes]:
        """Returns the root-to-leaf label concatenation of every leaf, in tree order."""
        result = []
        stack: list[tuple[NodeRef, bytes]] = [(self.root, b"")]
        while stack:
            ref, prefix = stack.pop()
            if ref.is_leaf:
                result.append(prefix + self.leaf_bytes(ref))
                continue
            if ref.value != ROOT:
                prefix += self.label_bytes(ref)
            for _, child in reversed(self.children(ref.value)):
                stack.append((child, prefix))
        return result

    def snapshot(self) -> dict[str, np.ndarray]:
        """Copies every arena field into numpy arrays (see `Arena.snapshot`)."""
        return self.arena.snapshot()

    def _describe(self, ref: NodeRef) -> str:
        if ref.is_leaf:
            text = self.leaf_bytes(ref).decode('utf-8', errors='replace')
            return f'"{text}" (leaf)'
        if ref.value == ROOT:
            return "(root)"
        text = self.label_bytes(ref).decode('utf-8', errors='replace')
        link = self.suffix_link(ref.value)
        return f'"{text}" (inner {ref.value}, suffix={link.value if link.is_inner else 0})'

    def render(self) -> str:
        """Returns the indented text dump of the tree, two spaces per level."""
        lines = [f"{'  ' * depth}{self._describe(ref)}" for depth, _, _, ref in self.walk()]
        return "\n".join(lines)

    def display(self) -> None:
        """Prints the text dump of the tree to stdout."""
        print(self.render())

    def display_graphviz(self, view_now: bool = False) -> object | None:
        """Builds a Graphviz Digraph of the tree.

        Inner nodes are labelled with their arena index, leaves with the offset
        of the suffix they spell. Edges carry their labels; suffix links are
        drawn dashed.

        Requires the `graphviz` Python library to be installed.

        Args:
            view_now (bool): If True, attempts to render and open the graph.

        Returns:
            graphviz.Digraph object if successful, None if graphviz is not installed.
        """
        try:
            import graphviz  # type: ignore
        except ImportError:
            print("Graphviz library not found. Please install it to use display_graphviz: pip install graphviz",
                  file=sys.stderr)
            return None

        dot = graphviz.Digraph(comment='Suffix Tree')
        dot.attr(rankdir='TB')

        dot.node(f"n{ROOT}", "R")
        stack = [(ROOT, 0)]
        while stack:
            index, string_depth = stack.pop()
            if index != ROOT:
                link = self.suffix_link(index)
                dot.edge(f"n{index}", f"n{link.value}", style='dashed', arrowhead='empty', color='grey')
            for byte, child in self.children(index):
                label = self.label_bytes(child).decode('utf-8', errors='replace')
                if child.is_leaf:
                    start = child.value - string_depth
                    child_id = f"l{start}"
                    dot.node(child_id, str(start), shape='plaintext')
                else:
                    child_id = f"n{child.value}"
                    dot.node(child_id, str(child.value))
                    begin, end = self.label(child.value)
                    stack.append((child.value, string_depth + end - begin))
                dot.edge(f"n{index}", child_id, label=label)

        if view_now:
            try:
                dot.view()
            except Exception as e_gv_view:
                print(f"Could not automatically view graph: {e_gv_view}. "
                      f"You might need to install Graphviz executables or a viewer.", file=sys.stderr)
        return dot

    def __repr__(self) -> str:
        return (f"SuffixTree(length={len(self.payload)}, inner_nodes={self.node_count}, "
                f"child_table='{self.arena.child_table}')")


# Example usage:
if __name__ == '__main__':
    text = sys.argv[1] if len(sys.argv) > 1 else "bananas$"
    try:
        tree = SuffixTree(text.encode('utf-8'), verbose=True)
        tree.display()
    except Exception as e:
        print(f"Failed to build suffix tree for {text!r}: {e}", file=sys.stderr)
        sys.exit(1)
