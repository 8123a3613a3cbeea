"""
Pytest configuration for spring_sim tests.

Puts src/ on sys.path so the tests run without an install, and makes sure no
test leaves a log storage strategy installed for the next one.
"""

import os
import sys

import pytest

_src = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
if _src not in sys.path:
    sys.path.insert(0, _src)

from spring_sim.logger import Logger


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    Logger.shutdown()
    Logger.is_logging_enabled = True
