from typing import Annotated

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from echoclient.bootstrap.config.loader import get_configfile
from echoclient.core.handlers.echo import DEFAULT_MESSAGE


class ClientSettings(BaseModel):
    host: Annotated[
        str,
        Field(
            description="Address of the server to connect to.",
            default="127.0.0.1"
        )
    ]

    port: Annotated[
        int,
        Field(
            description="TCP port of the server.",
            default=8080,
            ge=0,
            le=65535
        )
    ]

    connect_timeout: Annotated[
        float,
        Field(
            description="Maximum time allowed to establish the connection.",
            default=5.0,
            gt=0
        )
    ]

    run_timeout: Annotated[
        float | None,
        Field(
            description=(
                "Maximum lifetime of the session.\n"
                "When unset, the client runs until the server closes the connection."
            ),
            default=None,
            gt=0
        )
    ]

    timeout_graceful_shutdown: Annotated[
        float,
        Field(
            description="Maximum time allowed for the connection to close on shutdown.",
            default=5.0,
            gt=0
        )
    ]


class EchoClientSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="ECHOCLIENT_",
        env_nested_delimiter="__",
        extra="ignore"
    )

    client: Annotated[
        ClientSettings,
        Field(
            description=(
                "Connection configuration.\n"
                "Controls where the client connects and how long each phase of\n"
                "the session may take."
            ),
            default_factory=ClientSettings
        )
    ]

    message: Annotated[
        str,
        Field(
            description="Text sent, UTF-8 encoded, as soon as the connection is established.",
            default=DEFAULT_MESSAGE
        )
    ]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: tuple[PydanticBaseSettingsSource, ...] = (init_settings, env_settings)
        if (configfile := get_configfile()) is not None:
            sources += (YamlConfigSettingsSource(settings_cls, yaml_file=configfile),)
        return sources
