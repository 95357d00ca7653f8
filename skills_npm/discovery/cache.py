"""Scan result caching keyed to the lock file fingerprint."""

import json
from pathlib import Path
from typing import Callable, Iterable

from skills_npm.constants import CACHE_DIR, CACHE_FILE, SOURCE_NODE_MODULES
from skills_npm.discovery.lockfile import get_lockfile_fingerprint
from skills_npm.discovery.scanner import PackageScanner
from skills_npm.models import CacheRecord, LockfileFingerprint, ScanMode, ScanResult
from skills_npm.observability.audit import AuditSink, emit


class ScanCache:
    """Stores the most recent full scan of a root on disk.

    The cache lives in ``<root>/node_modules/.cache/skills-npm/`` and holds a
    single JSON document. It is reusable only while the lock file
    fingerprint, both hash and lock file name, is unchanged and the scan
    mode (recursion, source and ignored paths) is the same. Caching is an
    optimization: read failures count as a miss and write failures are
    ignored.
    """

    def __init__(self, root: Path, audit_sink: AuditSink | None = None):
        """Initialize cache for a scanned root.

        Args:
            root: The scanned project or workspace root
            audit_sink: Optional AuditSink for hit/miss events
        """
        self.root = Path(root)
        self.cache_path = self.root / CACHE_DIR / CACHE_FILE
        self._audit_sink = audit_sink

    def read(self) -> CacheRecord | None:
        """Load the stored record.

        Returns:
            CacheRecord, or None if absent, unreadable or malformed
        """
        try:
            with open(self.cache_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return CacheRecord.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError):
            return None

    def write(self, record: CacheRecord) -> None:
        """Overwrite the stored record. Failures are ignored."""
        try:
            self.cache_path.parent.mkdir(parents=True, exist_ok=True)
            content = json.dumps(record.to_dict(), indent=2)
            with open(self.cache_path, 'w', encoding='utf-8') as f:
                f.write(content)
        except (OSError, TypeError, ValueError):
            pass

    def clear(self) -> None:
        """Remove the stored record if there is one."""
        try:
            self.cache_path.unlink()
        except OSError:
            pass

    @staticmethod
    def is_valid(
        record: CacheRecord | None,
        fingerprint: LockfileFingerprint | None,
        mode: ScanMode | None = None,
    ) -> bool:
        """Check whether ``record`` was computed against ``fingerprint`` in ``mode``.

        ``mode`` defaults to a plain, non-recursive node_modules scan.
        """
        if record is None or fingerprint is None:
            return False
        return (
            record.lockfile.hash == fingerprint.hash
            and record.lockfile.path == fingerprint.path
            and record.mode == (mode or ScanMode())
        )

    def scan(
        self,
        full_scan: Callable[[], ScanResult],
        mode: ScanMode | None = None,
    ) -> ScanResult:
        """Serve the cached result, or run ``full_scan`` and store its output.

        Args:
            full_scan: Performs an uncached scan of the root
            mode: The options ``full_scan`` scans with

        Returns:
            The cached ScanResult (``from_cache`` True, ``packages_scanned``
            0) when valid, otherwise the fresh one
        """
        mode = mode or ScanMode()
        fingerprint = get_lockfile_fingerprint(self.root)

        if fingerprint is not None:
            record = self.read()
            if self.is_valid(record, fingerprint, mode):
                emit(self._audit_sink, "cache", str(self.root), self.cache_path,
                     hit=True, lockfile=fingerprint.path)
                return record.to_scan_result()

        result = full_scan()

        if fingerprint is None:
            # Nothing stable to key a cache on
            return result

        self.write(
            CacheRecord(
                lockfile=fingerprint,
                mode=mode,
                skills=result.skills,
                skills_invalid=result.skills_invalid,
                root_paths=result.root_paths,
            )
        )
        emit(self._audit_sink, "cache", str(self.root), self.cache_path,
             hit=False, lockfile=fingerprint.path)
        return result


def scan_with_cache(
    root: Path,
    scanner: PackageScanner | None = None,
    recursive: bool = False,
    source: str = SOURCE_NODE_MODULES,
    ignore_paths: Iterable[str] = (),
    use_cache: bool = True,
    audit_sink: AuditSink | None = None,
) -> ScanResult:
    """Scan ``root`` through its ScanCache.

    With ``use_cache`` False the stored record is discarded and the scan
    always runs without being persisted.
    """
    ignore_paths = list(ignore_paths)
    scanner = scanner or PackageScanner(audit_sink=audit_sink)
    cache = ScanCache(root, audit_sink=audit_sink)

    def full_scan() -> ScanResult:
        return scanner.scan_node_modules(
            root,
            recursive=recursive,
            source=source,
            ignore_paths=ignore_paths,
        )

    if not use_cache:
        cache.clear()
        return full_scan()
    return cache.scan(full_scan, ScanMode.of(recursive, source, ignore_paths))
