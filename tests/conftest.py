"""Pytest configuration for rtweekend tests.

Taichi is initialized once per session with f64 as the default float type.
Scenes, cameras and renderers allocate their own fields, so tests need no
shared state beyond the runtime.
"""

import pytest


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Repeated ti.init() calls reset the runtime and invalidate fields held by
    other tests, so the runtime is started here only.
    """
    from rtweekend.config import init_taichi

    init_taichi(arch="cpu", seed=42)
    yield
