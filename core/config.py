"""
Configuration Module
Reads runtime settings from the environment.
"""

from typing import List, Mapping, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_FETCH_TIMEOUT = 30.0
DEFAULT_PAGE_PORTS = (3000, 3001)
DEFAULT_API_PORT = 5000

AZURE_VARIABLES = (
    'AZURE_OPENAI_ENDPOINT',
    'AZURE_OPENAI_API_KEY',
    'AZURE_OPENAI_DEPLOYMENT',
    'AZURE_OPENAI_API_VERSION',
)


class Settings(BaseSettings):
    azure_endpoint: Optional[str] = Field(default=None, validation_alias='AZURE_OPENAI_ENDPOINT')
    azure_api_key: Optional[str] = Field(default=None, validation_alias='AZURE_OPENAI_API_KEY')
    azure_deployment: Optional[str] = Field(default=None, validation_alias='AZURE_OPENAI_DEPLOYMENT')
    azure_api_version: Optional[str] = Field(default=None, validation_alias='AZURE_OPENAI_API_VERSION')
    fetch_timeout: float = Field(default=DEFAULT_FETCH_TIMEOUT, gt=0, validation_alias='DOMDIFF_FETCH_TIMEOUT')
    log_level: Optional[str] = Field(default=None, validation_alias='DOMDIFF_LOG_LEVEL')
    page_port1: int = Field(default=DEFAULT_PAGE_PORTS[0], ge=0, le=65535, validation_alias='PORT1')
    page_port2: int = Field(default=DEFAULT_PAGE_PORTS[1], ge=0, le=65535, validation_alias='PORT2')
    api_port: int = Field(default=DEFAULT_API_PORT, ge=0, le=65535, validation_alias='PORT')

    model_config = SettingsConfigDict(
        populate_by_name=True,
        env_ignore_empty=True,
        extra='ignore',
    )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """Load settings from ``os.environ`` or from an explicit mapping.

        Raises:
            pydantic.ValidationError: If a variable holds a value of the wrong type
        """
        if environ is None:
            return cls()
        # Empty variables count as unset, as they do for the process environment
        return cls.model_validate({name: value for name, value in environ.items() if value})

    def missing_azure_settings(self) -> List[str]:
        values = (self.azure_endpoint, self.azure_api_key, self.azure_deployment, self.azure_api_version)
        return [name for name, value in zip(AZURE_VARIABLES, values) if not value]
