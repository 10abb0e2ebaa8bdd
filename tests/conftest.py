import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Selects the config overlay and initializes both domains by importing the
    application, which calls ``init()`` on each of them exactly once.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    # Real hashing cost makes every registration take a noticeable fraction of a second
    os.environ.setdefault("PASSWORD_HASH_ITERATIONS", "1000")
    os.environ.setdefault("LOG_DIR", str(Path(session.config.rootpath) / "logs"))

    import app  # noqa: F401


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path or "/bdd/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def client():
    from fastapi.testclient import TestClient

    from app import app

    return TestClient(app)
