# tests/test_validation.py
"""
U9: Input validation and device parsing

Covers:
- validate_data conversions and rejections
- parameter checks: positive ints, n_clusters, l versus D, sample sizes
- check_random_state seeds, generators and None
- parse_device
"""

from __future__ import annotations

import numpy as np
import pytest
import torch

from proclus.utils.device import parse_device
from proclus.utils.validation import (
    check_n_clusters,
    check_positive_int,
    check_random_state,
    check_sample_sizes,
    check_subspace_dim,
    validate_data,
)


def test_validate_data_converts_to_float64():
    X = validate_data(np.arange(6, dtype=np.float32).reshape(3, 2))
    assert X.dtype == torch.float64
    assert X.shape == (3, 2)

    X = validate_data([[1, 2], [3, 4]])
    assert X.dtype == torch.float64

    X = validate_data(np.arange(4.0))
    assert X.shape == (4, 1)


def test_validate_data_rejects_bad_input():
    with pytest.raises(ValueError):
        validate_data(np.array([[1.0, np.nan]]))
    with pytest.raises(ValueError):
        validate_data(np.array([[1.0, np.inf]]))
    with pytest.raises(ValueError):
        validate_data(np.zeros((2, 2, 2)))
    with pytest.raises(ValueError):
        validate_data(np.zeros((0, 3)))
    with pytest.raises(TypeError):
        validate_data("not data")


@pytest.mark.parametrize("value", [0, -3])
def test_check_positive_int_values(value):
    with pytest.raises(ValueError):
        check_positive_int(value, "k")


@pytest.mark.parametrize("value", [1.5, True, "3"])
def test_check_positive_int_types(value):
    with pytest.raises(TypeError):
        check_positive_int(value, "k")


def test_check_n_clusters():
    check_n_clusters(3, 3)
    with pytest.raises(ValueError):
        check_n_clusters(4, 3)


def test_check_subspace_dim():
    check_subspace_dim(2, 2)
    with pytest.raises(ValueError, match="Dimensionality of data < parameter l"):
        check_subspace_dim(3, 2)


def test_check_sample_sizes():
    assert check_sample_sizes(1000, 4, 30, 10) == (120, 40)
    # both capped by n
    assert check_sample_sizes(30, 4, 30, 10) == (30, 30)

    with pytest.raises(ValueError):
        check_sample_sizes(1000, 4, 5, 10)
    with pytest.raises(ValueError):
        check_sample_sizes(3, 4, 30, 10)


def test_check_random_state():
    a = check_random_state(5)
    b = check_random_state(np.int64(5))
    assert torch.equal(torch.rand(3, generator=a), torch.rand(3, generator=b))

    g = torch.Generator()
    assert check_random_state(g) is g

    assert isinstance(check_random_state(None), torch.Generator)

    with pytest.raises(TypeError):
        check_random_state("seed")


def test_parse_device():
    assert parse_device(None) == torch.device("cpu")
    assert parse_device("cpu") == torch.device("cpu")
    assert parse_device(torch.device("cpu")) == torch.device("cpu")
    assert isinstance(parse_device("auto"), torch.device)

    with pytest.raises(ValueError):
        parse_device("tpu")
    with pytest.raises(TypeError):
        parse_device(0)


@pytest.mark.skipif(torch.cuda.is_available(), reason="fallback only happens without CUDA")
def test_parse_device_cuda_falls_back_to_cpu():
    with pytest.warns(UserWarning, match="CUDA is not available"):
        assert parse_device("cuda:1") == torch.device("cpu")
    assert parse_device("auto") == torch.device("cpu")
