"""Environment switches shared by test suites built on eventual."""

import random
import time
from typing import Optional

from eventual.core.exceptions import ConfigurationError
from eventual.core.settings import app_settings, logger

_TRUE_VALUES = {"true", "1", "yes"}
_FALSE_VALUES = {"", "false", "0", "no"}


def allow_slow_tests(value: Optional[str] = None) -> bool:
    """Whether slow tests should run, from EVENTUAL_ALLOW_SLOW_TESTS.

    Unset, empty, false, 0 and no mean False; true, 1 and yes mean True
    (case-insensitive). Anything else is a configuration mistake.
    """
    raw = app_settings.EVENTUAL_ALLOW_SLOW_TESTS if value is None else value
    key = raw.strip().lower()
    if key in _FALSE_VALUES:
        return False
    if key in _TRUE_VALUES:
        return True
    raise ConfigurationError(f"Unrecognized value for EVENTUAL_ALLOW_SLOW_TESTS: {raw}")


def seed_random(seed: Optional[int] = None) -> int:
    """Seed `random` from EVENTUAL_TEST_RANDOM_SEED, or from the clock when that is 0.

    Returns the seed so a failing run can be reproduced.
    """
    if seed is None:
        seed = app_settings.EVENTUAL_TEST_RANDOM_SEED
    if seed == 0:
        seed = time.time_ns() // 1000 & 0x7FFFFFFF
    logger.info(f"Using random seed: {seed}")
    random.seed(seed)
    return seed
