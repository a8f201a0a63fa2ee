"""Shared pytest configuration for the tanglewalk test suite."""


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: stress tests excluded by run_tests.py unless --all is given")
