"""Utility functions for application configuration management.

Lambda functions read their configuration from **AWS AppConfig**. Each
environment (`APP_ENV`) has a dedicated AppConfig *Environment* within the
AppConfig *Application* identified by `APP_NAME`. The configuration JSON
document follows this structure:

    {
        "build": 7,
        "active_backend": "redis",
        "configs": {
            "shorten_url": {
                "redis": { "host": "...", "port": 6379, "db": 0 },
                "link_ttl_seconds": 31536000
            },
            "redirect_url": {
                "redis": { ... }
            }
        }
    }

Each Lambda loads its own section (e.g., `"shorten_url"`).

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`), defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return the store key prefix, or None if `APP_NAME` is not set.

    load_config(lambda_name: str) -> dict
        Load configuration for a given Lambda from AWS AppConfig. In SAM,
        load configuration from a local AppConfig agent.

Example:
    >>> from precis.utils.config import load_config
    >>> config = load_config('shorten_url')
    >>> config['redis']['host']
    'redis.host.docker.internal'
"""

import os
import json
import functools
import logging
import urllib.parse
import urllib.request
from typing import Any
from collections.abc import Callable

import boto3

from precis.constants import ENV
from precis.exceptions import ConfigurationError
from precis.types import AppConfig
from precis.utils.helpers import require_environment
from precis.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'precis'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'precis:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


def validate_link_ttl(value: Any) -> int | None:
    """Accept a positive number of seconds, or null (links never expire).

    Raises:
        ConfigurationError: for any other value, e.g. "3600" or 0.
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigurationError(f'link_ttl_seconds must be a positive integer or null (got {value!r}).')
    return value


# Keys of a lambda config section which aren't data store backends
SECTION_SETTINGS: dict[str, Callable[[Any], Any]] = {
    'link_ttl_seconds': validate_link_ttl,
}


def extract_section(document: AppConfig, lambda_name: str) -> dict:
    """Extract a lambda's active backend config (plus validated settings) from an AppConfig document.

    Raises:
        KeyError: if the document has no section for `lambda_name` or its backend.
        ConfigurationError: if a setting has an invalid value.
    """
    backend = document['active_backend']
    section = document['configs'][lambda_name]
    data = {backend: section[backend]}
    for key, validate in SECTION_SETTINGS.items():
        if key in section:
            data[key] = validate(section[key])
    return data


def validate_agent_url(url: str | None) -> str:
    """Only accept local AppConfig agent URLs (http(s)://localhost-ish[:2772])."""
    if not url:
        return ''
    components = urllib.parse.urlparse(url)
    if components.scheme not in {'http', 'https'}:
        raise ValueError(f'Bad scheme {url}')
    if components.hostname not in {'localhost', '127.0.0.1', 'host.docker.internal'}:
        raise ValueError(f'Bad host {url}')
    if components.port not in {2772, None}:
        raise ValueError(f'Bad port {url}')
    return url


def _sam_load_local_appconfig(func: Callable[[str], dict]) -> Callable[[str], dict]:
    """Decorator: load AppConfig from a local AppConfig Agent when running under SAM

    Behavior:
        - If the application is running locally and `APPCONFIG_AGENT_URL` is set
          to a safe local URL, fetch the configuration JSON from the local agent.
        - Else, call the wrapped function (which pulls from AWS AppConfig via boto3).
    """

    @functools.wraps(func)
    def wrapper(lambda_name: str, *args, **kwargs) -> dict:
        agent_url = validate_agent_url(os.getenv(ENV.AppConfig.AGENT_URL))
        if not running_locally() or not agent_url:
            return func(lambda_name, *args, **kwargs)

        profile_name = os.getenv(ENV.AppConfig.PROFILE_NAME, 'backend-config')
        url = f'{agent_url}/applications/{app_name()}/environments/{app_env()}/configurations/{profile_name}'

        logger.debug('Trying to load AppConfig from local agent.', extra={'agentUrl': url, 'lambdaName': lambda_name})
        with urllib.request.urlopen(url, timeout=5) as r:  # noqa: S310
            document = json.load(r)

        data = extract_section(document, lambda_name)
        logger.debug('Loaded AppConfig from local agent.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
        return data

    return wrapper


@_sam_load_local_appconfig
@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(lambda_name: str) -> dict:
    """Load configuration for a given Lambda from AWS AppConfig

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        lambda_name (str):
            Name of the Lambda (e.g., "shorten_url" or "redirect_url").

    Returns:
        dict: {<active backend>: <backend config>, **settings}

    Raises:
        MissingEnvironmentVariableError: if an AppConfig identifier is not set.
        ConfigurationError: if a lambda setting (e.g. link_ttl_seconds) is invalid.
        botocore.exceptions.ClientError: if AppConfig rejects the request.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name})

    appconfig = boto3.client('appconfigdata')

    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    document = json.loads(content.decode('utf-8'))

    data = extract_section(document, lambda_name)
    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'lambdaName': lambda_name, 'build': document.get('build')})
    return data
