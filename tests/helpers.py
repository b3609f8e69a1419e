import os

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, YamlConfigSettingsSource

from echoclient.bootstrap.config.settings import EchoClientSettings


class FakeEchoClientSettings(EchoClientSettings):
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
        if configfile := os.environ.get("TEST_ECHOCLIENTCONFIG"):
            sources += (YamlConfigSettingsSource(settings_cls, yaml_file=configfile),)
        return sources
