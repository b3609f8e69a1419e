import asyncio
import os
import signal
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[2]


async def start_silent_server() -> tuple[asyncio.AbstractServer, int, asyncio.Queue]:
    greetings: asyncio.Queue[bytes] = asyncio.Queue()

    async def handle(reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        greetings.put_nowait(await reader.readexactly(len(b"Netty rocks!")))
        await reader.read()  # never answer, wait for the client to leave
        writer.close()

    server = await asyncio.start_server(handle, host="127.0.0.1", port=0)
    port = server.sockets[0].getsockname()[1]
    return server, port, greetings


async def spawn_cli(port: int, cwd: Path) -> asyncio.subprocess.Process:
    env = {k: v for k, v in os.environ.items() if not k.startswith("ECHOCLIENT")}
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(ROOT), env.get("PYTHONPATH")]))

    return await asyncio.create_subprocess_exec(
        sys.executable, "-m", "echoclient.bootstrap.boot",
        "--host", "127.0.0.1", "--port", str(port),
        cwd=cwd,
        env=env,
        stdout=asyncio.subprocess.DEVNULL,
        stderr=asyncio.subprocess.DEVNULL,
    )


@pytest.mark.it
@pytest.mark.asyncio
@pytest.mark.skipif(sys.platform == "win32", reason="POSIX signals")
@pytest.mark.parametrize("sig", [signal.SIGINT, signal.SIGTERM])
async def test_cli_stops_on_signal_while_server_is_silent(tmp_path, sig):
    server, port, greetings = await start_silent_server()
    proc = await spawn_cli(port, tmp_path)
    try:
        greeting = await asyncio.wait_for(greetings.get(), timeout=10.0)
        assert greeting == b"Netty rocks!"

        proc.send_signal(sig)
        returncode = await asyncio.wait_for(proc.wait(), timeout=5.0)
    finally:
        if proc.returncode is None:
            proc.kill()
            await proc.wait()
        server.close()
        await server.wait_closed()

    assert returncode == 0


@pytest.mark.it
@pytest.mark.asyncio
async def test_cli_exits_with_error_when_connect_refused(tmp_path, unused_tcp_port):
    proc = await spawn_cli(unused_tcp_port, tmp_path)

    returncode = await asyncio.wait_for(proc.wait(), timeout=10.0)

    assert returncode == 1
