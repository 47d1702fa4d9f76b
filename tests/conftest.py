"""Shared test fixtures: synthetic DataFrames, headless matplotlib, temporary plots dir."""
import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import pytest


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


@pytest.fixture
def letters():
    """One categorical column: a x2, b x1, c x3."""
    return pd.DataFrame({"x": ["a", "a", "b", "c", "c", "c"]})


@pytest.fixture
def customers():
    """40-row synthetic customer table with ids, categories, a constant, weights and a list column."""
    np.random.seed(42)
    n = 40
    return pd.DataFrame({
        "customer_id": range(1, n + 1),
        "country": ["FR"] * 15 + ["ES"] * 10 + ["IT"] * 8 + ["DE"] * 5 + [None] * 2,
        "segment": ["retail", "pro", "vip", "retail"] * 10,
        "channel": ["web", "store", "app", "phone", "mail"] * 8,
        "gender": ["F", "M"] * 20,
        "source": ["organic"] * n,
        "revenue": np.random.uniform(10.0, 500.0, n).round(2),
        "tags": [["new", "promo"] for _ in range(n)],
    })


@pytest.fixture
def three_keys():
    """Third key 'c' has 5 distinct values; 'a' and 'b' have 2 each."""
    return pd.DataFrame({
        "a": ["x", "y"] * 10,
        "b": ["u", "u", "v", "v"] * 5,
        "c": ["k1", "k2", "k3", "k4", "k5"] * 4,
    })


@pytest.fixture
def plots_dir(tmp_path, monkeypatch):
    """Redirect chart exports to a temporary directory."""
    out = tmp_path / "plots"
    monkeypatch.setattr("src.eda.export.get_plots_dir", lambda base_dir=None: out)
    return out
