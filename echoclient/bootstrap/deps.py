import argparse
import json
from functools import lru_cache

from pydantic import ValidationError

from echoclient.bootstrap.config.loader import get_cli_args
from echoclient.bootstrap.config.settings import EchoClientSettings
from echoclient.core.client import EchoClient
from echoclient.core.handlers.echo import EchoClientHandler
from echoclient.core.models.config import ClientConfig


def cli_overrides(args: argparse.Namespace) -> dict:
    overrides: dict = {}
    client = {
        key: value
        for key in ("host", "port")
        if (value := getattr(args, key, None)) is not None
    }
    if client:
        overrides["client"] = client
    if getattr(args, "message", None) is not None:
        overrides["message"] = args.message
    return overrides


def load_config(
    settings_cls: type[EchoClientSettings] = EchoClientSettings,
    **overrides,
) -> EchoClientSettings:
    try:
        return settings_cls(**overrides)
    except FileNotFoundError as ex:
        raise SystemExit(f"Provide a correct configuration file path: {ex}")
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))


def build_client(settings: EchoClientSettings) -> EchoClient:
    config = ClientConfig(
        handler=EchoClientHandler(settings.message),
        host=settings.client.host,
        port=settings.client.port,
        connect_timeout=settings.client.connect_timeout,
        run_timeout=settings.client.run_timeout,
        timeout_graceful_shutdown=settings.client.timeout_graceful_shutdown,
    )
    return EchoClient(config)


@lru_cache
def get_config() -> EchoClientSettings:
    return load_config(**cli_overrides(get_cli_args()))


@lru_cache
def get_client() -> EchoClient:
    return build_client(get_config())
