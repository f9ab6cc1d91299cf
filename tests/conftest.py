import pytest
from fastapi.testclient import TestClient

from src.config import Settings
from src.main import create_app
from src.worker.runners import InlineWorkerRunner


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture()
def settings(tmp_path) -> Settings:
    return Settings(app_env="test", data_dir=str(tmp_path / "data"), max_iterations=1_000_000)


@pytest.fixture()
def app(settings: Settings):
    return create_app(settings, runner=InlineWorkerRunner())


@pytest.fixture()
def client(app):
    # Entering the context runs the lifespan (builds the app context) and keeps
    # one event loop alive across requests, so background completions can land.
    with TestClient(app) as c:
        yield c
