from linkshortener.utils.config import app_env, app_name, app_prefix, active_backend, data_dir, sweep_interval, base_url, load_config
from linkshortener.utils.helpers import utcnow, hash_password, is_valid_url, get_short_url, strip_base_url, require_environment
from linkshortener.utils.shortener import generate_shortcode, encode_base62
from linkshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'encode_base62',
    'app_env',
    'app_name',
    'app_prefix',
    'active_backend',
    'data_dir',
    'sweep_interval',
    'base_url',
    'load_config',
    'utcnow',
    'hash_password',
    'is_valid_url',
    'get_short_url',
    'strip_base_url',
    'require_environment',
    'initialize_logging',
]
