class PrecisError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:precis_error'


class ConfigurationError(PrecisError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError, KeyError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'

    def __str__(self) -> str:
        # KeyError.__str__ would wrap the message in quotes
        return str(self.args[0]) if self.args else ''
