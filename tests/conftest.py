import logging
from pathlib import Path

import pytest

from cosh.config import ENV_VARS

COMPOSE_YAML = """\
services:
  web:
    image: nginx
  db:
    image: postgres
"""


@pytest.fixture(autouse=True)
def clean_env(tmp_path: Path, monkeypatch) -> None:
    for var in ENV_VARS.values():
        monkeypatch.delenv(var, raising=False)
    monkeypatch.delenv("COSH_LOG_LEVEL", raising=False)
    monkeypatch.setenv("COSH_CONFIG", str(tmp_path / "no-such-config.yaml"))


@pytest.fixture(autouse=True)
def reset_cosh_logger():
    yield
    logger = logging.getLogger("cosh")
    logger.handlers.clear()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def base_dir(tmp_path: Path) -> Path:
    base = tmp_path / "containers"
    base.mkdir()
    return base


def write_compose(path: Path, content: str = COMPOSE_YAML) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    return path


@pytest.fixture
def make_compose():
    return write_compose
