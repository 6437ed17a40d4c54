"""pytest fixtures for the examples.

The api example keeps its users, id counter and rate-limit counters in
module globals, so ``example_app`` executes the ``app.py`` beside each
test afresh: every test starts with the two seeded users, id 3 next, and
an empty rate-limit store.
"""

import importlib.util
from pathlib import Path

import pytest

from switchyard import App


def _load_app(path: Path) -> App:
    spec = importlib.util.spec_from_file_location(f"switchyard_example_{path.parent.name}", path)
    if spec is None or spec.loader is None:
        msg = f"cannot load an example app from {path}"
        raise ImportError(msg)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.app


@pytest.fixture
def example_app(request: pytest.FixtureRequest) -> App:
    """A fresh App from the ``app.py`` next to the requesting test."""
    return _load_app(Path(request.path).with_name("app.py"))
