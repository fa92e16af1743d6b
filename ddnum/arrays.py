"""
Input coercion for the bulk APIs.

Sequences, numpy arrays and torch tensors are all accepted wherever an
array of doubles is expected. Values are flattened and converted to Python
floats so the scalar arithmetic follows IEEE-754 without numpy warnings.
"""

from typing import List

import numpy as np
import torch


def to_float_array(values) -> List[float]:
    """
    Convert array-like input to a flat list of Python floats.

    Args:
        values: Sequence, numpy array or torch tensor of numbers

    Returns:
        List of floats in row-major order
    """
    if isinstance(values, torch.Tensor):
        values = values.detach().cpu().to(torch.float64).numpy()
    elif isinstance(values, (list, tuple)):
        values = np.array(values, dtype=np.float64)
    return np.asarray(values, dtype=np.float64).ravel().tolist()


def ensure_same_length(a, b):
    """
    Check two arrays have the same length.

    Raises:
        ValueError: If the lengths differ
    """
    if len(a) != len(b):
        raise ValueError(f"Dimension mismatch: {len(a)} != {len(b)}")


def ensure_non_empty(a):
    """
    Check an array has at least one element.

    Raises:
        ValueError: If the array is empty
    """
    if len(a) == 0:
        raise ValueError("Empty array")
