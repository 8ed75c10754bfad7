"""
Shared fixtures, sections:
- Configuration / Settings
- Autouse fixtures
- Common arguments
- Time zones
"""
from datetime import datetime

import hypothesis
from hypothesis import strategies as st
import pytest

import dtrange
from dtrange.core.dtypes.dtypes import ClosedWindow, TimeUnit
from dtrange.tseries.timezones import get_resolver

# ----------------------------------------------------------------
# Configuration / Settings
# ----------------------------------------------------------------


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: mark a test as slow")


def pytest_addoption(parser):
    parser.addoption("--skip-slow", action="store_true", help="skip slow tests")
    parser.addoption("--only-slow", action="store_true", help="run only slow tests")


def pytest_runtest_setup(item):
    if "slow" in item.keywords and item.config.getoption("--skip-slow"):
        pytest.skip("skipping due to --skip-slow")

    if "slow" not in item.keywords and item.config.getoption("--only-slow"):
        pytest.skip("skipping due to --only-slow")


# Hypothesis
hypothesis.settings.register_profile(
    "ci",
    # Hypothesis timing checks are tuned for scalars by default, so we bump
    # them from 200ms to 500ms per test case as the global default.  If this
    # is too short for a specific test, (a) try to make it faster, and (b)
    # if it really is slow add `@settings(deadline=...)` with a working value,
    # or `deadline=None` to entirely disable timeouts for that test.
    deadline=500,
    suppress_health_check=(hypothesis.HealthCheck.too_slow,),
)
hypothesis.settings.load_profile("ci")

st.register_type_strategy(ClosedWindow, st.sampled_from(list(ClosedWindow)))
st.register_type_strategy(TimeUnit, st.sampled_from(list(TimeUnit)))

# ----------------------------------------------------------------
# Autouse fixtures
# ----------------------------------------------------------------


@pytest.fixture(autouse=True)
def configure_tests():
    """
    Restore every option to its default after each test.
    """
    yield
    dtrange.reset_option("all")


@pytest.fixture(autouse=True)
def add_imports(doctest_namespace):
    """
    Make `np` and `dtrange` names available for doctests.
    """
    import numpy as np

    doctest_namespace["np"] = np
    doctest_namespace["dtrange"] = dtrange


# ----------------------------------------------------------------
# Common arguments
# ----------------------------------------------------------------


@pytest.fixture(params=list(ClosedWindow), ids=lambda x: f"closed={x.value}")
def closed(request):
    """
    Fixture for trying all inclusion modes of a range.
    """
    return request.param


@pytest.fixture(params=list(TimeUnit), ids=lambda x: f"unit={x.value}")
def unit(request):
    """
    Fixture for trying all time units.
    """
    return request.param


# ----------------------------------------------------------------
# Time zones
# ----------------------------------------------------------------
TIMEZONES = [None, "UTC", "US/Eastern", "Europe/Amsterdam", "Asia/Tokyo"]
TIMEZONE_IDS = [repr(i) for i in TIMEZONES]


@pytest.fixture(params=TIMEZONES, ids=TIMEZONE_IDS)
def tz_naive_fixture(request):
    """
    Fixture for trying timezones including default (None).
    """
    return request.param


@pytest.fixture(params=TIMEZONES[1:], ids=TIMEZONE_IDS[1:])
def tz_aware_fixture(request):
    """
    Fixture for trying explicit timezones.
    """
    return request.param


@pytest.fixture(params=["pytz", "dateutil"])
def resolver(request):
    """
    Fixture for trying each time zone database backend.
    """
    return get_resolver(request.param)


@pytest.fixture
def step_dst_resolver():
    """
    A deterministic zone, UTC+1 in winter and UTC+2 from 2021-03-28 01:00 UTC
    to 2021-10-31 01:00 UTC, mirroring Central European Time.
    """
    from dtrange._testing import StepDSTResolver

    return StepDSTResolver(
        dst_start=datetime(2021, 3, 28, 1), dst_end=datetime(2021, 10, 31, 1)
    )
