import math

import numpy as np

from pointclust.shared.clustering.point import Point, euclidean_distance
from pointclust.shared.utils.numpy_helpers import convert_to_primitives_nested, pairwise_euclidean


class TestPairwiseEuclidean:
    def test_matches_point_distance_exactly(self):
        rng = np.random.default_rng(0)
        coords = rng.uniform(-100, 100, size=(15, 2))
        matrix = pairwise_euclidean(coords)
        points = [Point(x, y) for x, y in coords]
        for i, a in enumerate(points):
            for j, b in enumerate(points):
                assert matrix[i, j] == euclidean_distance(a, b)

    def test_symmetric_with_zero_diagonal(self):
        coords = np.array([[0.0, 0.0], [3.0, 4.0], [-1.0, 2.5]])
        matrix = pairwise_euclidean(coords)
        np.testing.assert_array_equal(matrix, matrix.T)
        np.testing.assert_array_equal(np.diag(matrix), np.zeros(3))

    def test_two_arrays(self):
        matrix = pairwise_euclidean(np.array([[0.0, 0.0]]), np.array([[3.0, 4.0], [0.0, 1.0]]))
        assert matrix.tolist() == [[5.0, 1.0]]

    def test_empty(self):
        assert pairwise_euclidean(np.empty((0, 2))).shape == (0, 0)
        assert pairwise_euclidean(np.empty((0, 2)), np.ones((3, 2))).shape == (0, 3)

    def test_nan_propagates(self):
        matrix = pairwise_euclidean(np.array([[np.nan, 0.0], [0.0, 0.0]]))
        assert math.isnan(matrix[0, 1])
        assert matrix[1, 1] == 0.0


class TestConvertToPrimitivesNested:
    def test_nested_structures(self):
        value = {"a": np.array([1, 2]), "b": [np.float64(1.5), (np.int64(3), "x")], "c": None}
        result = convert_to_primitives_nested(value)
        assert result == {"a": [1, 2], "b": [1.5, [3, "x"]], "c": None}
        assert type(result["b"][0]) is float
        assert type(result["b"][1][0]) is int

    def test_scalars_pass_through(self):
        assert convert_to_primitives_nested("text") == "text"
        assert convert_to_primitives_nested(np.bool_(True)) is True
