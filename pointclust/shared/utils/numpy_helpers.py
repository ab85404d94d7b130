from typing import Optional
import numpy as np


def pairwise_euclidean(a: np.ndarray, b: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Euclidean distance matrix between the rows of two arrays.

    Computed from coordinate differences rather than the dot-product expansion,
    so entries match ``euclidean_distance`` on the same pair exactly and
    NaN/inf coordinates propagate instead of being rejected.

    Args:
        a (np.ndarray): Array of shape (n, d).
        b (np.ndarray, optional): Array of shape (m, d). Defaults to ``a``.

    Returns:
        np.ndarray: Matrix of shape (n, m).
    """
    a = np.asarray(a, dtype=float)
    b = a if b is None else np.asarray(b, dtype=float)
    diff = a[:, np.newaxis, :] - b[np.newaxis, :, :]
    return np.sqrt(np.sum(diff * diff, axis=-1))


def convert_to_primitives_nested(obj):
    """
    Convert numpy values inside a nested list/tuple/dict to plain Python values.

    Used before dumping results to YAML, which cannot represent numpy types.
    """
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    if isinstance(obj, np.generic):
        return obj.item()
    if isinstance(obj, dict):
        return {key: convert_to_primitives_nested(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [convert_to_primitives_nested(item) for item in obj]
    return obj
