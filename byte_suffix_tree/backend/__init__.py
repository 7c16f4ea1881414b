'''Construction core: reference encoding, node arena, active point and Ukkonen phases.'''

from .arena import ROOT, TOP, Arena, DenseChildren, Node, SparseChildren
from .cursor import Cursor, canonicalize
from .node_ref import MAX_VALUE, NodeRef, RefKind
from .ukkonen import MAX_PAYLOAD_LENGTH, as_payload, build, extend

__all__ = [
    'ROOT', 'TOP', 'Arena', 'DenseChildren', 'Node', 'SparseChildren',
    'Cursor', 'canonicalize',
    'MAX_VALUE', 'NodeRef', 'RefKind',
    'MAX_PAYLOAD_LENGTH', 'as_payload', 'build', 'extend',
]
