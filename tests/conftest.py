import numpy as np
import pytest

from MCE.API import ServerConfig, create_app
from MCE.CSM import MemorySolutionStore


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return MemorySolutionStore()


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def make_client(store, rng):
    def _make(**overrides):
        cfg = ServerConfig(session_secret="test-secret", trust_proxy=False, **overrides)
        app = create_app(cfg, store=store, rng=rng)
        app.testing = True
        return app.test_client()
    return _make


@pytest.fixture
def client(make_client):
    return make_client()
