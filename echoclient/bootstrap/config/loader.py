import argparse
import os
from functools import lru_cache
from pathlib import Path

DEFAULT_CONFIGFILE = "echoclient.yaml"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="echoclient",
        description=(
            "Connect to a TCP server, send a greeting and print every chunk "
            "of data received until the server closes the connection."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to an echoclient configuration file"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity for the client.\n"
            "Choose among: DEBUG, INFO, WARNING, ERROR, CRITICAL.\n\n"
            "DEBUG    → connection events and write failures.\n"
            "INFO     → received data (default).\n"
            "WARNING  → only warnings and errors.\n"
            "ERROR    → only errors.\n"
            "CRITICAL → only critical failures.\n\n"
            "Example:\n"
            "  --log-level DEBUG"
        ),
    )

    parser.add_argument(
        "--host",
        type=str,
        help="Server address, overrides client.host"
    )

    parser.add_argument(
        "--port",
        type=int,
        help="Server TCP port, overrides client.port"
    )

    parser.add_argument(
        "-m", "--message",
        type=str,
        help="Text sent once the connection is established"
    )

    return parser


@lru_cache
def get_cli_args() -> argparse.Namespace:
    return build_parser().parse_args()


def find_configfile(raw: str | None) -> Path | None:
    # Priority: CLI > ENV > default file in current working directory
    raw = raw or os.getenv("ECHOCLIENTCONFIG") or None

    if raw is None:
        file = Path.cwd() / DEFAULT_CONFIGFILE
        return file if file.is_file() else None

    file = Path(raw)
    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            "  - Or set the ECHOCLIENTCONFIG environment variable\n"
            f"  - Or place a '{DEFAULT_CONFIGFILE}' file in the current working directory."
        )

    return file


@lru_cache
def get_configfile() -> Path | None:
    return find_configfile(get_cli_args().config)
