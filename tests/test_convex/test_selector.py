import numpy as np
import pytest

from qpkit.convex.selector import IndexSelector


def test_starts_all_excluded():
    selector = IndexSelector(4)
    assert len(selector) == 4
    assert selector.count_included() == 0
    assert selector.count_excluded() == 4
    assert selector.last_included == -1
    assert selector.last_excluded == -1


def test_include_and_exclude_track_history():
    selector = IndexSelector(5)
    selector.include(3)
    selector.include([0, 4])
    assert selector.get_included().tolist() == [0, 3, 4]
    assert selector.get_excluded().tolist() == [1, 2]
    assert selector.last_included == 4
    assert selector.is_last_included()
    assert selector.is_included(0)

    selector.exclude(0)
    assert selector.last_excluded == 0
    assert not selector.is_last_included()
    assert not selector.is_included(0)


def test_redundant_changes_do_not_touch_history():
    selector = IndexSelector(3)
    selector.include(1)
    selector.exclude(2)
    assert selector.last_excluded == -1
    assert selector.is_last_included()
    selector.include(1)
    assert selector.get_included().tolist() == [1]


def test_include_all_and_exclude_all():
    selector = IndexSelector(3)
    selector.include_all()
    assert selector.count_included() == 3
    selector.exclude_all()
    assert selector.count_included() == 0


def test_shrink_excludes_highest_included():
    selector = IndexSelector(6)
    selector.include([5, 1, 3])
    selector.shrink()
    assert selector.get_included().tolist() == [1, 3]
    assert selector.last_excluded == 5
    selector.shrink()
    selector.shrink()
    selector.shrink()
    assert selector.count_included() == 0


def test_revert_last_inclusion():
    selector = IndexSelector(4)
    selector.include([2, 0])
    selector.revert_last_inclusion()
    assert selector.get_included().tolist() == [2]
    assert selector.last_excluded == 0


def test_accepts_numpy_indices():
    selector = IndexSelector(4)
    selector.include(np.array([1, 2]))
    selector.exclude(np.int64(1))
    assert selector.get_included().tolist() == [2]


def test_repr_lists_partition():
    selector = IndexSelector(3)
    selector.include(1)
    text = repr(selector)
    assert "included=[1]" in text
    assert "excluded=[0, 2]" in text


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        IndexSelector(-1)
