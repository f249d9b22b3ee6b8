from __future__ import annotations

import importlib.metadata
import subprocess
from pathlib import Path
from typing import Optional

DISTRIBUTION = "ctedit"


def _run_git(args: list[str], cwd: Path) -> Optional[str]:
    try:
        out = subprocess.check_output(
            ["git", *args], cwd=str(cwd), stderr=subprocess.DEVNULL
        )
    except (subprocess.CalledProcessError, OSError):
        return None
    return out.decode().strip() or None


def get_package_version() -> str:
    try:
        return importlib.metadata.version(DISTRIBUTION)
    except importlib.metadata.PackageNotFoundError:
        return "unknown"


def get_commit() -> Optional[str]:
    """Short commit hash when running from a git checkout."""
    here = Path(__file__).resolve().parent
    commit = _run_git(["rev-parse", "--short=7", "HEAD"], cwd=here)
    if commit is None:
        return None
    status = _run_git(["status", "--porcelain"], cwd=here)
    return f"{commit}-dirty" if status else commit


def get_version_string() -> str:
    version = get_package_version()
    commit = get_commit()
    if commit:
        return f"{version} ({commit})"
    return version
