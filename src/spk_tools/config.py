"""Configuration: kernel paths and light-time iteration settings from environment."""

import logging
import os
from pathlib import Path

from spk_tools.constants import (
    DEFAULT_LIGHT_TIME_MAX_ITERATIONS,
    DEFAULT_LIGHT_TIME_TOLERANCE,
)

logger = logging.getLogger(__name__)

# Env var overrides with sensible defaults.
DEFAULT_KERNEL_PATH = '.'


def get_kernel_path() -> str:
    """Return directory used to resolve relative kernel names (SPK_KERNEL_PATH or default).

    Returns:
        Path string.
    """
    return os.environ.get('SPK_KERNEL_PATH', DEFAULT_KERNEL_PATH)


def resolve_kernel(name: str | os.PathLike[str]) -> Path:
    """Return a kernel path, resolving relative names against SPK_KERNEL_PATH.

    A relative name that exists as given (relative to the working directory)
    is used unchanged.

    Parameters:
        name: Kernel file name or path.

    Returns:
        Path to the kernel (not checked for existence beyond the lookup order).
    """
    path = Path(name)
    if path.is_absolute() or path.exists():
        return path
    return Path(get_kernel_path()) / path


def get_leapsecs_path() -> str:
    """Return path to a NAIF LSK leap seconds file for rms-julian.

    Prefers JULIAN_LEAPSECS, then a .tls file under SPK_KERNEL_PATH. Returns
    an empty string when neither exists so callers fall back to the bundled LSK.

    Returns:
        Path string to LSK, or ''.
    """
    path = os.environ.get('JULIAN_LEAPSECS', '').strip()
    if path:
        return path
    base = Path(get_kernel_path())
    for name in ('naif0012.tls', 'naif0011.tls', 'naif0010.tls', 'leapseconds.tls'):
        p = base / name
        if p.exists():
            return str(p)
    return ''


def get_light_time_tolerance() -> float:
    """Return light-time convergence tolerance in seconds (SPK_LIGHT_TIME_TOLERANCE).

    Returns:
        Positive tolerance; the default when unset or invalid.
    """
    raw = os.environ.get('SPK_LIGHT_TIME_TOLERANCE', '').strip()
    if not raw:
        return DEFAULT_LIGHT_TIME_TOLERANCE
    try:
        value = float(raw)
    except ValueError:
        logger.warning('Invalid SPK_LIGHT_TIME_TOLERANCE %r; using %g', raw, DEFAULT_LIGHT_TIME_TOLERANCE)
        return DEFAULT_LIGHT_TIME_TOLERANCE
    if value <= 0.0:
        logger.warning('SPK_LIGHT_TIME_TOLERANCE must be positive, got %r; using %g', raw, DEFAULT_LIGHT_TIME_TOLERANCE)
        return DEFAULT_LIGHT_TIME_TOLERANCE
    return value


def get_light_time_max_iterations() -> int:
    """Return maximum light-time iterations (SPK_LIGHT_TIME_MAX_ITERATIONS).

    Returns:
        Iteration count >= 1; the default when unset or invalid.
    """
    raw = os.environ.get('SPK_LIGHT_TIME_MAX_ITERATIONS', '').strip()
    if not raw:
        return DEFAULT_LIGHT_TIME_MAX_ITERATIONS
    try:
        value = int(raw)
    except ValueError:
        logger.warning(
            'Invalid SPK_LIGHT_TIME_MAX_ITERATIONS %r; using %d',
            raw,
            DEFAULT_LIGHT_TIME_MAX_ITERATIONS,
        )
        return DEFAULT_LIGHT_TIME_MAX_ITERATIONS
    if value < 1:
        logger.warning(
            'SPK_LIGHT_TIME_MAX_ITERATIONS must be >= 1, got %r; using %d',
            raw,
            DEFAULT_LIGHT_TIME_MAX_ITERATIONS,
        )
        return DEFAULT_LIGHT_TIME_MAX_ITERATIONS
    return value
