"""
Tests for the value-returning edits in `skelseg/editing.py`.
"""

import pytest

from skelseg import (
    Node,
    PreconditionViolation,
    Segment,
    SegmentClass,
    Synapse,
    merge,
    remove_node,
    remove_nodes,
    split,
    translate,
)

# ---- Fixtures ---------------------------------------------------------------


def _line(n, r=1.0, x0=0.0):
    return [(x0 + float(i), 0.0, 0.0, r) for i in range(n)]


@pytest.fixture
def annotated():
    """Ten nodes along x, presynapses at 2, 5, 8 and postsynapses at 0, 9."""
    seg = Segment(_line(10), segment_class=SegmentClass.AXON)
    for i in (2, 5, 8):
        seg.attach_pre_synapse(i, Synapse(id=i))
    for i in (0, 9):
        seg.attach_post_synapse(i, Synapse(id=100 + i))
    return seg


# ---- Tests: translate -------------------------------------------------------


def test_translate_shifts_positions_only(annotated):
    moved = translate(annotated, (1.0, -2.0, 3.5))
    assert moved[0] == Node(1.0, -2.0, 3.5, 1.0)
    assert moved[9] == Node(10.0, -2.0, 3.5, 1.0)
    assert moved.segment_class is SegmentClass.AXON
    assert moved.pre_synapses == annotated.pre_synapses
    assert moved.post_synapses == annotated.post_synapses
    # input untouched
    assert annotated[0] == Node(0.0, 0.0, 0.0, 1.0)
    assert moved.pre_synapses is not annotated.pre_synapses


def test_translate_requires_three_components(annotated):
    with pytest.raises(PreconditionViolation):
        translate(annotated, (1.0, 2.0))


# ---- Tests: remove_nodes ----------------------------------------------------


@pytest.mark.parametrize("i", [0, 2, 5, 9])
def test_remove_single_node_reindexes(annotated, i):
    result = remove_node(annotated, i)
    assert len(result) == len(annotated) - 1
    for slots, original in (
        (result.pre_synapses, annotated.pre_synapses),
        (result.post_synapses, annotated.post_synapses),
    ):
        for j, synapse in original.items():
            if j < i:
                assert slots[j] == synapse
            elif j > i:
                assert slots[j - 1] == synapse
            else:
                assert slots.index_of(synapse) is None


def test_remove_range(annotated):
    result = remove_nodes(annotated, range(4, 7))
    assert [n.x for n in result] == [0.0, 1.0, 2.0, 3.0, 7.0, 8.0, 9.0]
    assert result.pre_synapses.indices() == [2, 5]
    assert result.post_synapses.indices() == [0, 6]
    assert result.segment_class is SegmentClass.AXON
    assert len(annotated) == 10


def test_remove_with_slice(annotated):
    result = remove_nodes(annotated, slice(0, 2))
    assert result[0] == Node(2.0, 0.0, 0.0, 1.0)
    assert result.pre_synapses.indices() == [0, 3, 6]
    assert result.post_synapses.indices() == [7]


def test_remove_everything_gives_empty_segment(annotated):
    result = remove_nodes(annotated, range(0, 10))
    assert result.is_empty()
    assert result.segment_class is SegmentClass.UNDEFINED
    assert result.num_pre_synapses() == 0


def test_remove_empty_range_is_identity(annotated):
    assert remove_nodes(annotated, range(3, 3)) == annotated


@pytest.mark.parametrize("bad", [range(8, 12), range(0, 4, 2)])
def test_remove_rejects_bad_ranges(annotated, bad):
    with pytest.raises(PreconditionViolation):
        remove_nodes(annotated, bad)


# ---- Tests: split -----------------------------------------------------------


def test_split_general(annotated):
    first, second = split(annotated, 5)
    assert [n.x for n in first] == [0.0, 1.0, 2.0, 3.0, 4.0]
    assert [n.x for n in second] == [5.0, 6.0, 7.0, 8.0, 9.0]
    assert first.segment_class is SegmentClass.AXON
    assert second.segment_class is SegmentClass.AXON
    assert first.pre_synapses.indices() == [2]
    assert second.pre_synapses.indices() == [0, 3]
    assert first.post_synapses.indices() == [0]
    assert second.post_synapses.indices() == [4]


def test_split_at_first_node_keeps_it_in_first_half(annotated):
    first, second = split(annotated, 0)
    assert first.nodes == (Node(0.0, 0.0, 0.0, 1.0),)
    assert len(second) == 9
    assert second[0] == Node(1.0, 0.0, 0.0, 1.0)
    assert first.post_synapses.indices() == [0]
    assert second.pre_synapses.indices() == [1, 4, 7]


def test_split_at_second_node_matches_first_node_split(annotated):
    a1, a2 = split(annotated, 0)
    b1, b2 = split(annotated, 1)
    assert a1 == b1
    assert a2 == b2


def test_split_single_node_duplicates_it():
    seg = Segment([(1.0, 2.0, 3.0, 0.5)], segment_class=SegmentClass.DENDRITE)
    seg.attach_pre_synapse(0, Synapse(id=1))
    first, second = split(seg, 0)
    assert first.nodes == second.nodes == seg.nodes
    assert first.num_pre_synapses() == 1
    assert second.num_pre_synapses() == 0
    assert second.segment_class is SegmentClass.DENDRITE


@pytest.mark.parametrize("index", [-1, 10, 11])
def test_split_index_out_of_range(annotated, index):
    with pytest.raises(PreconditionViolation):
        split(annotated, index)


def test_split_empty_segment_fails():
    with pytest.raises(PreconditionViolation):
        split(Segment(), 0)


# ---- Tests: merge -----------------------------------------------------------


def test_merge_concatenates_and_shifts_synapses():
    a = Segment(_line(3), segment_class=SegmentClass.AXON)
    b = Segment(_line(2, x0=10.0), segment_class=SegmentClass.DENDRITE)
    a.attach_pre_synapse(1, Synapse(id=1))
    b.attach_pre_synapse(0, Synapse(id=2))
    b.attach_post_synapse(1, Synapse(id=3))
    merged = merge(a, b)
    assert [n.x for n in merged] == [0.0, 1.0, 2.0, 10.0, 11.0]
    assert merged.pre_synapses.items() == [(1, Synapse(id=1)), (3, Synapse(id=2))]
    assert merged.post_synapses.items() == [(4, Synapse(id=3))]
    assert merged.segment_class is SegmentClass.AXON


def test_merge_longer_segment_wins_class():
    a = Segment(_line(2), segment_class=SegmentClass.AXON)
    b = Segment(_line(3), segment_class=SegmentClass.DENDRITE)
    assert merge(a, b).segment_class is SegmentClass.DENDRITE


def test_merge_tie_keeps_first_class():
    a = Segment(_line(2), segment_class=SegmentClass.AXON)
    b = Segment(_line(2), segment_class=SegmentClass.DENDRITE)
    assert merge(a, b).segment_class is SegmentClass.AXON
    assert merge(b, a).segment_class is SegmentClass.DENDRITE


def test_merge_then_split_round_trips_nodes(annotated):
    other = Segment(_line(4, x0=20.0))
    merged = merge(annotated, other)
    first, second = split(merged, len(annotated))
    assert first.nodes == annotated.nodes
    assert second.nodes == other.nodes
    assert first.pre_synapses == annotated.pre_synapses
    assert first.post_synapses == annotated.post_synapses


def test_merge_with_empty_segment(annotated):
    merged = merge(annotated, Segment())
    assert merged == annotated
