import numpy as np
import pytest

from pointclust.shared.clustering.algorithms.kmeans import KMeansClustering, KMeansConfig
from pointclust.shared.clustering.errors import ConvergenceError, ConvergenceWarning, InvalidParameterError
from pointclust.shared.clustering.point import Centroid, Point


def _two_groups():
    return [Point(0, 0), Point(0, 1), Point(10, 10), Point(10, 11)]


def _blobs(seed: int = 0, per_blob: int = 20):
    rng = np.random.default_rng(seed)
    centers = np.array([[0.0, 0.0], [8.0, 8.0], [-8.0, 8.0]])
    return np.vstack([c + rng.normal(scale=1.0, size=(per_blob, 2)) for c in centers])


class _ScriptedGenerator:
    """Stands in for numpy.random.Generator with fixed draws"""

    def __init__(self, first_index, uniform_draws):
        self.first_index = first_index
        self.uniform_draws = list(uniform_draws)
        self.integer_bounds = []

    def integers(self, high):
        self.integer_bounds.append(high)
        return self.first_index

    def random(self):
        return self.uniform_draws.pop(0)


class TestKMeansConfigValidation:
    def test_rejects_zero_clusters(self):
        with pytest.raises(InvalidParameterError):
            KMeansClustering(KMeansConfig(n_clusters=0))

    def test_rejects_unknown_init(self):
        with pytest.raises(InvalidParameterError):
            KMeansClustering(KMeansConfig(n_clusters=2, init="forgy"))

    def test_rejects_negative_tolerance(self):
        with pytest.raises(InvalidParameterError):
            KMeansClustering(KMeansConfig(n_clusters=2, tol=-1.0))

    def test_rejects_zero_max_iter(self):
        with pytest.raises(InvalidParameterError):
            KMeansClustering(KMeansConfig(n_clusters=2, max_iter=0))

    def test_rejects_more_clusters_than_points(self):
        clusterer = KMeansClustering(KMeansConfig(n_clusters=5))
        with pytest.raises(InvalidParameterError):
            clusterer.fit(_two_groups())

    def test_rejects_empty_input(self):
        clusterer = KMeansClustering(KMeansConfig(n_clusters=1))
        with pytest.raises(InvalidParameterError):
            clusterer.fit([])


class TestKMeansClustering:
    @pytest.mark.parametrize("init", ["k-means++", "random"])
    @pytest.mark.parametrize("seed", range(10))
    def test_two_groups_converge_regardless_of_seeding(self, init, seed):
        points = _two_groups()
        clusterer = KMeansClustering(KMeansConfig(n_clusters=2, init=init, random_state=seed))
        clusterer.fit(points)

        centroids = sorted((c.x, c.y) for c in clusterer.centroids)
        assert centroids[0] == pytest.approx((0.0, 0.5))
        assert centroids[1] == pytest.approx((10.0, 10.5))

        assert points[0].cluster_id == points[1].cluster_id
        assert points[2].cluster_id == points[3].cluster_id
        assert points[0].cluster_id != points[2].cluster_id
        assert clusterer.converged_

    def test_labels_are_complete(self):
        points = [Point(float(x), float(y)) for x, y in _blobs()]
        clusterer = KMeansClustering(KMeansConfig(n_clusters=3, random_state=1))
        clusterer.fit(points)

        assert all(0 <= p.cluster_id < 3 for p in points)
        assert clusterer.labels_.tolist() == [p.cluster_id for p in points]
        assert len(clusterer.centroids) == 3

    def test_centroids_are_means_of_assigned_points(self):
        features = _blobs(seed=3)
        clusterer = KMeansClustering(KMeansConfig(n_clusters=3, random_state=5))
        labels = clusterer.fit_predict(features)

        for i, center in enumerate(clusterer.cluster_centers_):
            members = features[labels == i]
            if len(members):
                np.testing.assert_allclose(center, members.mean(axis=0), atol=1e-9)

    def test_k_equal_to_n_seeds_every_point_once(self):
        points = [Point(0, 0), Point(3, 1), Point(-2, 5), Point(7, 7), Point(1, -4), Point(9, 0)]
        for seed in range(20):
            clusterer = KMeansClustering(KMeansConfig(n_clusters=len(points), random_state=seed))
            labels = clusterer.fit_predict(points)
            assert sorted(labels.tolist()) == list(range(len(points)))
            assert clusterer.n_iter_ == 1

    def test_random_init_uses_distinct_points(self):
        points = [Point(float(i), float(i % 3)) for i in range(6)]
        clusterer = KMeansClustering(KMeansConfig(n_clusters=6, init="random", random_state=0))
        labels = clusterer.fit_predict(points)
        assert sorted(labels.tolist()) == list(range(6))

    def test_empty_cluster_keeps_its_centroid(self):
        points = [Point(0, 0), Point(0, 0), Point(0, 0)]
        clusterer = KMeansClustering(KMeansConfig(n_clusters=2, random_state=0))
        labels = clusterer.fit_predict(points)

        # ties go to the lowest centroid index, leaving centroid 1 without points
        assert labels.tolist() == [0, 0, 0]
        assert clusterer.centroids == [Centroid(0.0, 0.0), Centroid(0.0, 0.0)]
        assert clusterer.converged_

    def test_inertia(self):
        clusterer = KMeansClustering(KMeansConfig(n_clusters=2, random_state=0))
        clusterer.fit(_two_groups())
        assert clusterer.inertia_ == pytest.approx(1.0)

    def test_same_seed_same_result(self):
        features = _blobs(seed=7)
        first = KMeansClustering(KMeansConfig(n_clusters=3, random_state=11)).fit(features)
        second = KMeansClustering(KMeansConfig(n_clusters=3, random_state=11)).fit(features)
        np.testing.assert_array_equal(first.cluster_centers_, second.cluster_centers_)
        np.testing.assert_array_equal(first.labels_, second.labels_)

    def test_explicit_generator(self):
        features = _blobs(seed=2)
        first = KMeansClustering(KMeansConfig(n_clusters=3), rng=np.random.default_rng(99)).fit(features)
        second = KMeansClustering(KMeansConfig(n_clusters=3), rng=np.random.default_rng(99)).fit(features)
        np.testing.assert_array_equal(first.cluster_centers_, second.cluster_centers_)

    def test_array_input_creates_points(self):
        clusterer = KMeansClustering(KMeansConfig(n_clusters=2, random_state=0))
        clusterer.fit(np.array([[0.0, 0.0], [0.0, 1.0], [10.0, 10.0], [10.0, 11.0]]))
        assert len(clusterer.points) == 4
        assert [p.cluster_id for p in clusterer.points] == clusterer.labels_.tolist()

    def test_predict_uses_nearest_centroid(self):
        clusterer = KMeansClustering(KMeansConfig(n_clusters=2, random_state=0))
        clusterer.fit(_two_groups())
        near_origin, near_far = clusterer.predict([Point(0.2, 0.2), Point(9.0, 9.0)])
        assert near_origin == clusterer.points[0].cluster_id
        assert near_far == clusterer.points[2].cluster_id

    def test_predict_before_fit_fails(self):
        clusterer = KMeansClustering(KMeansConfig(n_clusters=2))
        with pytest.raises(ValueError):
            clusterer.predict([Point(0, 0)])


class TestKMeansIterationCap:
    def test_warns_when_cap_reached(self):
        clusterer = KMeansClustering(KMeansConfig(n_clusters=2, max_iter=1, random_state=0))
        with pytest.warns(ConvergenceWarning):
            clusterer.fit(_two_groups())
        assert not clusterer.converged_
        assert clusterer.n_iter_ == 1
        assert all(0 <= label < 2 for label in clusterer.labels_)

    def test_raises_when_configured(self):
        clusterer = KMeansClustering(
            KMeansConfig(n_clusters=2, max_iter=1, random_state=0, raise_on_max_iter=True)
        )
        with pytest.raises(ConvergenceError, match="did not converge within 1 iterations"):
            clusterer.fit(_two_groups())


class TestKMeansPlusPlusSeeding:
    # collinear points at x = 0, 1, 3, 6
    features = np.array([[0.0, 0.0], [1.0, 0.0], [3.0, 0.0], [6.0, 0.0]])

    def test_draws_weighted_by_squared_distance(self):
        # d2 from point 0: [0, 1, 9, 36], cumulative [0, 1, 10, 46], draw 0.1 * 46 = 4.6
        # then d2 to {0, 2}: [0, 1, 0, 9], cumulative [0, 1, 1, 10], draw 0.1 * 10 = 1.0
        # lands exactly on index 1, whose cumulative weight equals the draw
        rng = _ScriptedGenerator(first_index=0, uniform_draws=[0.1, 0.1])
        clusterer = KMeansClustering(KMeansConfig(n_clusters=3), rng=rng)

        centers = clusterer._init_kmeans_plus_plus(self.features)

        np.testing.assert_array_equal(centers, self.features[[0, 2, 1]])
        assert rng.integer_bounds == [4]
        assert rng.uniform_draws == []

    def test_zero_draw_takes_first_positive_weight(self):
        # d2 from point 3: [36, 25, 9, 0], cumulative [36, 61, 70, 70]
        rng = _ScriptedGenerator(first_index=3, uniform_draws=[0.0])
        clusterer = KMeansClustering(KMeansConfig(n_clusters=2), rng=rng)

        centers = clusterer._init_kmeans_plus_plus(self.features)

        np.testing.assert_array_equal(centers, self.features[[3, 0]])

    def test_last_point_reachable_just_below_the_total(self):
        rng = _ScriptedGenerator(first_index=0, uniform_draws=[0.999])
        clusterer = KMeansClustering(KMeansConfig(n_clusters=2), rng=rng)

        centers = clusterer._init_kmeans_plus_plus(self.features)

        np.testing.assert_array_equal(centers, self.features[[0, 3]])
