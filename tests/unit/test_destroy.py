"""
Tests for destruction: every owned block released exactly once
"""

import pytest

from errchain import (
    EMPTY,
    OUT_OF_MEMORY,
    ErrChainError,
    ErrorFactory,
    TrackingAllocator,
    codes,
)


@pytest.fixture
def allocator():
    return TrackingAllocator()


@pytest.fixture
def factory(allocator):
    return ErrorFactory(allocator)


def test_destroy_none_is_noop(factory, allocator):
    factory.destroy(None)
    assert allocator.free_calls == 0


def test_destroy_sentinels_is_noop(factory, allocator):
    factory.destroy(EMPTY)
    factory.destroy(OUT_OF_MEMORY)

    assert allocator.free_calls == 0
    assert not EMPTY.is_released
    assert not OUT_OF_MEMORY.is_released


def test_copy_chain_leaves_nothing_outstanding(factory, allocator):
    e = factory.new_from_copy("root")
    for i in range(10):
        e = factory.wrap_copy(e, f"layer {i}")

    assert allocator.outstanding == 22

    factory.destroy(e)

    assert allocator.outstanding == 0
    assert allocator.free_calls == 22


def test_mixed_chain_frees_only_owned_storage(factory, allocator):
    e = factory.new_from_static("static root")        # node only
    e = factory.wrap_formatted(e, "formatted %d", 1)  # node + message
    e = factory.wrap_static(e, "static")              # node only
    e = factory.wrap_copy(e, "copy")                  # node + message

    assert allocator.outstanding == 6

    factory.destroy(e)

    assert allocator.outstanding == 0
    assert allocator.free_calls == 6


def test_chain_wrapped_around_nothing(factory, allocator):
    e = factory.wrap_copy(None, "outer")
    factory.destroy(e)

    assert allocator.outstanding == 0
    assert not EMPTY.is_released


def test_every_node_marked_released(factory):
    inner = factory.new_from_copy("inner")
    outer = factory.wrap_copy(inner, "outer")

    factory.destroy(outer)

    assert outer.is_released
    assert inner.is_released


def test_double_destroy_raises(factory):
    e = factory.new_from_copy("x")
    factory.destroy(e)

    with pytest.raises(ErrChainError) as exc_info:
        factory.destroy(e)

    assert exc_info.value.error_code == codes.USE_AFTER_RELEASE


def test_released_inner_detected_before_freeing(factory, allocator):
    inner = factory.new_from_copy("inner")
    outer = factory.wrap_copy(inner, "outer")
    factory.destroy(inner)  # caller broke the ownership contract
    frees_before = allocator.free_calls

    with pytest.raises(ErrChainError):
        factory.destroy(outer)

    assert allocator.free_calls == frees_before
    assert not outer.is_released


def test_long_chain_does_not_recurse(factory, allocator):
    e = factory.new_from_static("root")
    for _ in range(5000):
        e = factory.wrap_static(e, "again")

    factory.destroy(e)

    assert allocator.outstanding == 0


def test_tracking_allocator_rejects_double_free():
    allocator = TrackingAllocator()
    block = allocator.alloc(8)
    allocator.free(block)

    with pytest.raises(RuntimeError):
        allocator.free(block)
