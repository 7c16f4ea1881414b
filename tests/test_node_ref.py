'''Tests for the compact reference encoding in `byte_suffix_tree.backend.node_ref`.

Covers the tag layout (NONE is 0, leaf and inner tags never collide), exact
decoding, and the range checks that must reject values instead of wrapping.

Usage:
  - `pytest tests/test_node_ref.py`
'''
import sys
import os

import pytest

# Add the project root to sys.path to allow importing byte_suffix_tree without installing it
_project_root_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
if _project_root_dir not in sys.path:
    sys.path.insert(0, _project_root_dir)

from byte_suffix_tree.backend import node_ref
from byte_suffix_tree.backend.node_ref import NodeRef, RefKind
from byte_suffix_tree.errors import CapacityError


def test_none_is_zero():
    assert node_ref.NONE == 0
    assert node_ref.is_none(node_ref.NONE)
    assert not node_ref.is_leaf(node_ref.NONE)
    assert not node_ref.is_inner(node_ref.NONE)
    assert node_ref.decode(node_ref.NONE) == NodeRef(RefKind.NONE, 0)


def test_leaf_and_inner_with_same_value_differ():
    assert node_ref.leaf(0) != node_ref.inner(0)
    assert node_ref.leaf(7) != node_ref.inner(7)
    # Neither kind ever collides with NONE, even for value 0
    assert not node_ref.is_none(node_ref.leaf(0))
    assert not node_ref.is_none(node_ref.inner(0))


def test_bit_layout():
    assert node_ref.leaf(5) == (5 << 2) | 1
    assert node_ref.inner(5) == (5 << 2) | 2
    assert node_ref.value_of(node_ref.leaf(5)) == 5
    assert node_ref.value_of(node_ref.inner(123)) == 123


def test_max_value_fits_int32():
    assert node_ref.inner(node_ref.MAX_VALUE) <= 2**31 - 1
    assert node_ref.leaf(node_ref.MAX_VALUE) <= 2**31 - 1


@pytest.mark.parametrize('value', [0, 1, 2, 255, 65_536, node_ref.MAX_VALUE])
def test_decode_inverts_encode(value):
    leaf_ref = node_ref.decode(node_ref.leaf(value))
    inner_ref = node_ref.decode(node_ref.inner(value))
    assert leaf_ref == NodeRef(RefKind.LEAF, value)
    assert inner_ref == NodeRef(RefKind.INNER, value)
    assert leaf_ref.is_leaf and not leaf_ref.is_inner
    assert inner_ref.is_inner and not inner_ref.is_leaf
    assert node_ref.encode(leaf_ref) == node_ref.leaf(value)
    assert node_ref.encode(inner_ref) == node_ref.inner(value)


@pytest.mark.parametrize('encoder', [node_ref.leaf, node_ref.inner])
@pytest.mark.parametrize('value', [-1, node_ref.MAX_VALUE + 1, 2**40])
def test_out_of_range_values_are_rejected(encoder, value):
    with pytest.raises(CapacityError):
        encoder(value)


def test_capacity_error_is_an_overflow_error():
    with pytest.raises(OverflowError):
        node_ref.leaf(node_ref.MAX_VALUE + 1)


@pytest.mark.parametrize('code', [-4, 3, (9 << 2) | node_ref.TAG_NONE])
def test_decode_rejects_invalid_codes(code):
    with pytest.raises(ValueError):
        node_ref.decode(code)


def test_repr():
    assert repr(node_ref.decode(node_ref.NONE)) == "NodeRef.NONE"
    assert repr(node_ref.decode(node_ref.leaf(3))) == "NodeRef.LEAF(3)"
    assert repr(node_ref.decode(node_ref.inner(4))) == "NodeRef.INNER(4)"
