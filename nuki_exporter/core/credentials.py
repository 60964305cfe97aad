"""
Bridge credentials loading
"""

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from nuki_exporter.core.config import Settings
from nuki_exporter.core.exceptions import ConfigError

logger = structlog.get_logger(__name__)


class Credentials(BaseModel):
    """Credentials consist of the bridge token only"""
    model_config = ConfigDict(coerce_numbers_to_str=True)

    token: str = ""


def load_credentials_file(path: str) -> Credentials:
    """
    Read a YAML credentials file.

    Args:
        path: Path of a YAML document containing a ``token`` field

    Returns:
        The parsed credentials

    Raises:
        ConfigError: If the file cannot be read or parsed, or the token is empty
    """
    try:
        with open(path) as file:
            data = yaml.safe_load(file)
    except OSError as e:
        raise ConfigError(f"Couldn't read credentials file: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Couldn't parse credentials file: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError("Couldn't parse credentials file: YAML file needs to contain token field")

    try:
        credentials = Credentials.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Couldn't parse credentials file: {e}") from e

    if not credentials.token:
        raise ConfigError("Couldn't parse credentials file: Token not set")
    return credentials


def resolve_credentials(settings: Settings) -> Credentials:
    """Pick the token from settings or, failing that, from the credentials file"""
    if settings.token:
        logger.debug("Using token from flags or environment")
        return Credentials(token=settings.token)
    if not settings.credentials_file:
        raise ConfigError("Either credentials_file or token need to be set!")
    logger.debug("Reading credentials file", credentials_file=settings.credentials_file)
    return load_credentials_file(settings.credentials_file)
