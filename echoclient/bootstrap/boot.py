import asyncio

from echoclient.bootstrap.config.loader import get_cli_args
from echoclient.bootstrap.deps import get_client
from echoclient.core.errors import ConnectError
from echoclient.core.helpers.utils import stop_on_signals, setup_logging


def main():
    cli = get_cli_args()
    setup_logging(cli.log_level)

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    try:
        client = get_client()
        with stop_on_signals(loop) as stop_event:
            loop.run_until_complete(client.run(stop_event))
    except ConnectError:
        raise SystemExit(1)
    except KeyboardInterrupt:
        pass
    finally:
        try:
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.run_until_complete(loop.shutdown_default_executor())
        finally:
            loop.close()


if __name__ == "__main__":
    main()
