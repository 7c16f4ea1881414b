'''Initialize byte_suffix_tree, exposing the suffix tree builder and its read-only view.'''

from .backend import MAX_PAYLOAD_LENGTH, Arena, Cursor, NodeRef, RefKind, build, extend
from .errors import CapacityError, InternalConsistencyError, SuffixTreeError
from .suffix_tree import SuffixTree

__all__ = [
    'SuffixTree',
    'Arena', 'Cursor', 'NodeRef', 'RefKind', 'build', 'extend', 'MAX_PAYLOAD_LENGTH',
    'SuffixTreeError', 'CapacityError', 'InternalConsistencyError',
]
