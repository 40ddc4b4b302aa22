from pathlib import Path
from typing import Generator

import dotenv
import pytest

from tests.unit.mocks.http_handlers import URLS


@pytest.fixture(scope="session", autouse=True)
def _load_test_env() -> Generator[None, None, None]:
    """Load test environment variables from base + local env files."""
    project_root = Path(__file__).parents[2]
    dotenv.load_dotenv(project_root / ".env.defaults", override=True)
    dotenv.load_dotenv(project_root / ".env.test-local", override=True)
    yield


@pytest.fixture
def urls() -> list[str]:
    return list(URLS)
