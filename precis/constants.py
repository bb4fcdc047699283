from enum import StrEnum


class Limits:
    """Input size limits."""

    MAX_URL_LENGTH = 2048
    SHORTCODE_LENGTH = 8  # Length of hash-derived shortcodes
    MIN_ALIAS_LENGTH = 3
    MAX_ALIAS_LENGTH = 8


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


class ErrorCode(StrEnum):
    """Error codes returned to API clients."""

    VALIDATION_ERROR = 'VALIDATION_ERROR'
    ALIAS_ALREADY_EXISTS = 'ALIAS_ALREADY_EXISTS'
    NOT_FOUND = 'NOT_FOUND'
    INTERNAL_SERVER_ERROR = 'INTERNAL_SERVER_ERROR'
    MISSING_SHORTCODE = 'MISSING_SHORTCODE'
    INVALID_REQUEST_BODY = 'INVALID_REQUEST_BODY'
    LINK_EXPIRED = 'LINK_EXPIRED'


class LogEvent(StrEnum):
    """Structured log event names (attached via `extra={'event': ...}`)."""

    SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
    ALIAS_CONFLICT = 'ALIAS_CONFLICT'
    VALIDATION_FAILED = 'VALIDATION_FAILED'
    SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
    REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
    LINK_EXPIRED = 'LINK_EXPIRED'
    DATA_STORE_FAILURE = 'DATA_STORE_FAILURE'
    INVALID_REQUEST_BODY = 'INVALID_REQUEST_BODY'
    MISSING_SHORTCODE = 'MISSING_SHORTCODE'
