#!/usr/bin/env python

"""Convert log10 values to probabilities without under/overflow."""

import numpy as np


def normalize_from_log10(array: np.ndarray, axis: int = -1) -> np.ndarray:
    """Normalize log10 values in place to linear values summing to 1.

    The largest entry is subtracted before exponentiating so that the
    largest exponent becomes 0 and nothing overflows. A 2-D array is
    normalized row by row along `axis`. A row that is -inf everywhere
    becomes uniform. The same (modified) array is returned.

    Examples
    --------
    >>> arr = np.array([-1., -2., -2.])
    >>> normalize_from_log10(arr)
    array([0.83333333, 0.08333333, 0.08333333])
    """
    maxes = array.max(axis=axis, keepdims=True)

    # rows where every entry is impossible carry no information: uniform
    empty = np.isneginf(maxes)
    if empty.any():
        array[np.broadcast_to(empty, array.shape)] = 0.0
        maxes[empty] = 0.0

    array -= maxes
    np.power(10., array, out=array)
    array /= array.sum(axis=axis, keepdims=True)
    return array
