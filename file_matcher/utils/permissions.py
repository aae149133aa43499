"""Permission checking utilities."""

import os
from pathlib import Path


def check_path_readable(path: str) -> bool:
    """Check that a host path exists and can be read (and listed, for directories)."""
    p = Path(path)
    if not p.exists():
        return False
    if p.is_dir():
        return os.access(str(p), os.R_OK | os.X_OK)
    return os.access(str(p), os.R_OK)
