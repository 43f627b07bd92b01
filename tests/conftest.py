import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tests.helpers import draw_ids, make_history


@pytest.fixture
def rng():
    return np.random.default_rng(20240116)


@pytest.fixture
def random_history(rng):
    """120 draws with uniformly random outcomes."""
    return make_history(rng.integers(0, 100, size=120).tolist())


@pytest.fixture
def day16_history(rng):
    """300 draws: outcome 7 on every 16th, uniformly random on every 1st."""
    ids = draw_ids(300)
    outcomes = [7 if i[:2] == "16" else int(rng.integers(0, 100)) for i in ids]
    return make_history(outcomes)
