"""Lock file fingerprinting for scan cache validation."""

import hashlib
from pathlib import Path

from skills_npm.constants import BINARY_LOCK_FILES, LOCK_FILES
from skills_npm.models import LockfileFingerprint


def is_binary_lock_file(filename: str) -> bool:
    return filename in BINARY_LOCK_FILES


def get_lockfile_fingerprint(root: Path) -> LockfileFingerprint | None:
    """Fingerprint the highest-priority lock file present in ``root``.

    ``bun.lockb`` is hashed as raw bytes; text lock files are decoded as
    UTF-8 first. A lock file that cannot be read is skipped in favour of the
    next one.

    Args:
        root: Project root holding the lock file

    Returns:
        LockfileFingerprint with the MD5 hex digest and the lock file name,
        or None if no lock file exists
    """
    root = Path(root)
    for filename in LOCK_FILES:
        lock_path = root / filename
        try:
            if is_binary_lock_file(filename):
                content = lock_path.read_bytes()
            else:
                content = lock_path.read_text(encoding='utf-8').encode('utf-8')
        except (OSError, UnicodeDecodeError):
            continue

        return LockfileFingerprint(
            hash=hashlib.md5(content).hexdigest(),
            path=filename,
        )

    return None
