"""Global pytest configuration.

Registers the `tests.sample_topologies` fixture plugin without importing it
here, so pytest applies assertion rewriting to it.
"""

from __future__ import annotations

from importlib.util import find_spec

pytest_plugins: list[str] = []
if find_spec("tests.sample_topologies") is not None:
    pytest_plugins = ["tests.sample_topologies"]
