from precis.utils.config import app_env, app_name, app_prefix, load_config
from precis.utils.helpers import base_url, get_short_url, require_environment, guarantee_500_response
from precis.utils.shortener import generate_shortcode
from precis.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'base_url',
    'get_short_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
