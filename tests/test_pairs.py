"""Tests for the KD-tree and closest point pair search."""
import logging

import numpy as np
import pytest

from pointgeom import KDTree, closest_pair, closest_point_pairs


@pytest.fixture
def clouds():
    rng = np.random.default_rng(3)
    return rng.random((200, 3)), rng.random((300, 3))


def brute_force(source, target):
    dists = np.linalg.norm(source[:, None, :] - target[None, :, :], axis=2)
    return dists.argmin(axis=1), dists.min(axis=1)


class TestKDTree:

    def test_query_matches_brute_force(self, clouds):
        source, target = clouds
        tree = KDTree(leaf_size=8, dimension=3)
        tree.build(target)
        expected_idx, expected_dist = brute_force(source, target)
        for p, idx, dist in zip(source, expected_idx, expected_dist):
            got_idx, got_dist = tree.query(p)
            assert got_idx == idx
            assert got_dist == pytest.approx(dist)

    def test_splits_across_widest_axis(self):
        rng = np.random.default_rng(11)
        target = rng.random((500, 2)) * np.array([1.0, 1000.0])
        tree = KDTree(leaf_size=16, dimension=2)
        root = tree.build(target)
        assert root.axis == 1
        source = rng.random((50, 2)) * np.array([1.0, 1000.0])
        expected_idx, _ = brute_force(source, target)
        assert [tree.query(p)[0] for p in source] == list(expected_idx)

    def test_empty_tree(self):
        tree = KDTree()
        assert tree.build(np.empty((0, 3))) is None
        assert tree.query([0.0, 0.0, 0.0]) == (-1, np.inf)
        assert len(tree) == 0

    def test_dimension_mismatch_raises(self):
        with pytest.raises(ValueError):
            KDTree(dimension=3).build(np.zeros((4, 2)))

    def test_build_is_timed(self, clouds, caplog):
        with caplog.at_level(logging.DEBUG, logger="pointgeom.kdtree"):
            KDTree(leaf_size=4).build(clouds[1])
        timed = [r for r in caplog.records if "took" in r.getMessage()]
        assert len(timed) == 1


class TestClosestPointPairs:

    def test_matches_brute_force(self, clouds):
        source, target = clouds
        pairs = closest_point_pairs(source, target, leaf_size=16)
        expected_idx, expected_dist = brute_force(source, target)
        assert [i for i, _, _ in pairs] == list(range(len(source)))
        assert [j for _, j, _ in pairs] == list(expected_idx)
        np.testing.assert_allclose([d for _, _, d in pairs], expected_dist)

    def test_max_distance_filters(self, clouds):
        source, target = clouds
        _, expected_dist = brute_force(source, target)
        pairs = closest_point_pairs(source, target, max_distance=0.05)
        assert len(pairs) == int(np.sum(expected_dist <= 0.05))
        assert all(d <= 0.05 for _, _, d in pairs)

    def test_parallel_matches_serial(self, clouds):
        source, target = clouds
        serial = closest_point_pairs(source[:40], target, n_jobs=1)
        parallel = closest_point_pairs(source[:40], target, n_jobs=2)
        assert serial == parallel

    def test_two_dimensional(self):
        source = [(0.0, 0.0), (10.0, 10.0)]
        target = [(9.0, 9.5), (0.5, 0.0), (100.0, 100.0)]
        pairs = closest_point_pairs(source, target)
        assert [(i, j) for i, j, _ in pairs] == [(0, 1), (1, 0)]
        assert pairs[0][2] == pytest.approx(0.5)

    def test_empty_inputs(self):
        assert closest_point_pairs([], [(0.0, 0.0, 0.0)]) == []
        assert closest_point_pairs([(0.0, 0.0, 0.0)], np.empty((0, 3))) == []

    def test_dimension_mismatch_raises(self):
        with pytest.raises(ValueError):
            closest_point_pairs([(0.0, 0.0)], [(0.0, 0.0, 0.0)])


class TestClosestPair:

    def test_finds_global_minimum(self):
        source = [(0.0, 0.0, 0.0), (5.0, 5.0, 5.0), (9.0, 0.0, 0.0)]
        target = [(5.0, 5.0, 5.5), (20.0, 0.0, 0.0), (9.0, 0.3, 0.0)]
        i, j, dist = closest_pair(source, target)
        assert (i, j) == (2, 2)
        assert dist == pytest.approx(0.3)

    def test_tie_prefers_lowest_source_index(self):
        source = [(0.0, 0.0), (4.0, 0.0)]
        target = [(2.0, 0.0)]
        i, j, dist = closest_pair(source, target)
        assert (i, j) == (0, 0)
        assert dist == pytest.approx(2.0)

    def test_empty_is_none(self):
        assert closest_pair([], [(1.0, 2.0)]) is None
