"""Tests for the image co-visibility graph."""

import itertools
from pathlib import Path

import numpy as np

from mvscene.analysis.overlap import compute_shared_points
from mvscene.core.model import Image, ImageDirectory, Point, SceneModel
from mvscene.readers.colmap import read_colmap


def _scene(num_images, tracks) -> SceneModel:
    directory = ImageDirectory()
    images = []
    for i in range(num_images):
        directory.add(f"{i}.jpg")
        images.append(Image(f"{i}.jpg", Path(f"{i}.jpg"), np.eye(3), np.eye(3), [0, 0, 0], 10, 10))
    points = [Point(0.0, 0.0, 1.0, list(track)) for track in tracks]
    return SceneModel(images, points, directory)


class TestSharedPoints:
    def test_colmap_scene(self, colmap_workspace: Path):
        model = read_colmap(colmap_workspace)
        assert model.compute_shared_points() == [{1: 1, 2: 2}, {0: 1, 2: 1}, {0: 2, 1: 1}]

    def test_symmetric(self):
        rng = np.random.RandomState(0)
        tracks = [rng.choice(6, size=rng.randint(1, 6), replace=False) for _ in range(50)]
        shared = compute_shared_points(_scene(6, tracks))
        for a, b in itertools.permutations(range(6), 2):
            assert shared[a].get(b, 0) == shared[b].get(a, 0)

    def test_self_pairs_skipped(self):
        shared = compute_shared_points(_scene(2, [[0, 0], [1]]))
        assert shared == [{}, {}]

    def test_duplicate_track_entries_count_per_position(self):
        shared = compute_shared_points(_scene(2, [[0, 1, 0]]))
        assert shared == [{1: 2}, {0: 2}]

    def test_neighbor_keys_sorted(self):
        shared = compute_shared_points(_scene(4, [[3, 0], [2, 0], [1, 0]]))
        assert list(shared[0]) == [1, 2, 3]

    def test_counts(self):
        shared = compute_shared_points(_scene(3, [[0, 1], [1, 0], [0, 1, 2]]))
        assert shared[0] == {1: 3, 2: 1}
        assert shared[2] == {0: 1, 1: 1}

    def test_no_points(self):
        assert compute_shared_points(_scene(3, [])) == [{}, {}, {}]
