from __future__ import annotations
import os


DEFAULT_FRONTEND = 'aegis.frontend.json_frontend:JsonFrontend'
DEFAULT_LOG_LEVEL = 'INFO'

_TRUTHY = {'1', 'true', 'yes', 'on'}


def flag_from_env(var: str, default: bool = False) -> bool:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


def get_frontend_path() -> str:
    return os.environ.get('AEGIS_FRONTEND', '').strip() or DEFAULT_FRONTEND


def builtin_modules_enabled() -> bool:
    # Math/Http/Json/System are only offered by toolchains that ship the stdlib modules
    return flag_from_env('AEGIS_BUILTIN_MODULES')


def get_log_level() -> str:
    return os.environ.get('AEGIS_LOG_LEVEL', '').strip().upper() or DEFAULT_LOG_LEVEL
