# tests/conftest.py
import os
import sys

# Headless SDL so tests don't open a window
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

# Ensure project root is importable (so core.* imports work when running from repo root)
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

import numpy as np
import pytest

STEP_DATA = [2, 2, 2, 3, 3, 3, 4, 4, 4, 5, 5, 5]

@pytest.fixture
def step_data():
    return list(STEP_DATA)

@pytest.fixture
def rng():
    return np.random.default_rng(1234)

@pytest.fixture
def transform_factory():
    from core.moving_mean import MovingMean
    def make(window=5, sink=None):
        return MovingMean().set_window(window).transform(sink=sink)
    return make
