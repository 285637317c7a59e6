"""Pytest configuration for the sccdag test suite.

Hypothesis profiles:
- dev: local development, 200 examples
- ci: 50 derandomized examples (selected when CI=true)

Override with HYPOTHESIS_PROFILE=dev|ci.
"""

import os

os.environ.setdefault("MPLBACKEND", "Agg")

from hypothesis import settings  # noqa: E402

settings.register_profile("dev", max_examples=200, deadline=None)
settings.register_profile("ci", max_examples=50, deadline=None, derandomize=True, print_blob=True)


def _detect_profile() -> str:
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())
