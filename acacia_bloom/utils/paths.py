"""
Path resolver for acacia-bloom.

Rules
-----
* base_dir      → project root (the directory holding the acacia_bloom package)
* logs_dir      → base_dir/logs; fallback ~/AcaciaBloom/logs when read-only
* settings_path → base_dir/settings.json
"""

from pathlib import Path

from ..config import SETTINGS_FILENAME


def _get_base_dir() -> Path:
    # acacia_bloom/utils/paths.py → parent.parent.parent = project root
    return Path(__file__).resolve().parent.parent.parent


def _try_writable(path: Path) -> bool:
    """
    Return True if *path* can be created and used as a writable directory.

    Uses a canary-file probe so permission issues are detected up front.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
        canary = path / ".write_probe"
        canary.touch()
        canary.unlink()
        return True
    except (OSError, PermissionError):
        return False


def get_base_dir() -> Path:
    return _get_base_dir()


def get_logs_dir() -> Path:
    """
    Logs directory.

    Priority:
      1. <base_dir>/logs
      2. ~/AcaciaBloom/logs
    """
    primary = _get_base_dir() / "logs"
    if _try_writable(primary):
        return primary
    fallback = Path.home() / "AcaciaBloom" / "logs"
    fallback.mkdir(parents=True, exist_ok=True)
    return fallback


def get_default_settings_path() -> Path:
    """settings.json next to the project root (may not exist)."""
    return _get_base_dir() / SETTINGS_FILENAME
