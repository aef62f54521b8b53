from collections.abc import Generator

from pytest import fixture

import tagjson.config


@fixture(autouse=True)
def reset_global_config() -> Generator[None, None, None]:
    """Isolate tests from each other's global configuration."""
    tagjson.config._global_config = None
    yield
    tagjson.config._global_config = None
