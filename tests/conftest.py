import pytest

from void.void_evaluator import Session


@pytest.fixture  # type: ignore[misc]
def session() -> Session:
    return Session()
