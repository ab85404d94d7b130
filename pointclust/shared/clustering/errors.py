class ClusteringError(Exception):
    """Base exception for clustering failures"""


class InvalidParameterError(ClusteringError, ValueError):
    """Raised for parameters or inputs a clustering run cannot work with"""


class ConvergenceError(ClusteringError, RuntimeError):
    """Raised when an iterative algorithm exhausts its iteration budget"""

    def __init__(self, max_iter: int):
        super().__init__(f"did not converge within {max_iter} iterations")
        self.max_iter = max_iter


class ConvergenceWarning(UserWarning):
    """Issued when an iterative algorithm stops at its iteration cap"""


class DegenerateMetricWarning(UserWarning):
    """Issued when a quality metric is undefined for every point"""
