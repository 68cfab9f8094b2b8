import pytest

from livemodel.config import ApplicationConfig, Environment, reset_config, set_config


@pytest.fixture(autouse=True)
def testing_config():
    """Run every test with the TESTING configuration, observer errors propagate."""
    config = ApplicationConfig.for_environment(Environment.TESTING)
    set_config(config)
    yield config
    reset_config()
