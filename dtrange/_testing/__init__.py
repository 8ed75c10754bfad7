from dtrange._testing.asserters import (  # noqa:F401
    assert_datetime_array_equal,
    assert_numpy_array_equal,
    assert_time_array_equal,
)
from dtrange._testing.resolvers import FixedOffsetResolver, StepDSTResolver  # noqa:F401
