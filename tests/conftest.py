import asyncio
import logging

import pytest
import pytest_asyncio
import yaml

from echoclient.core.handlers.echo import EchoClientHandler
from echoclient.core.transport.protocol import ClientProtocol
from tests.fake.fake_handler import RecordingHandler
from tests.fake.fake_transport import FakeTransport


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def echo_handler():
    return EchoClientHandler()


@pytest.fixture
def recording_handler():
    return RecordingHandler()


@pytest_asyncio.fixture
async def echo_protocol(echo_handler):
    return ClientProtocol(echo_handler, loop=asyncio.get_running_loop())


@pytest.fixture
def received(caplog):
    caplog.set_level(logging.INFO, logger="core.handlers.echo")

    def _received() -> list[str]:
        return [
            record.getMessage()
            for record in caplog.records
            if record.name == "core.handlers.echo" and record.levelno == logging.INFO
        ]

    return _received


@pytest.fixture
def config_file(tmp_path):
    file = tmp_path / "echoclient.yaml"

    data = {
        "client": {
            "host": "10.0.0.7",
            "port": 7000,
            "connect_timeout": 2.5,
            "run_timeout": 30,
            "timeout_graceful_shutdown": 1,
        },
        "message": "hello from yaml",
    }

    file.write_text(yaml.dump(data))
    return file


@pytest.fixture
def clean_env(monkeypatch):
    monkeypatch.delenv("TEST_ECHOCLIENTCONFIG", raising=False)
    monkeypatch.delenv("ECHOCLIENTCONFIG", raising=False)
    for key in ("ECHOCLIENT_MESSAGE", "ECHOCLIENT_CLIENT__HOST", "ECHOCLIENT_CLIENT__PORT"):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch
