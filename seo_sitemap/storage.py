"""
Filesystem persistence for sitemap artifacts and robots.txt.
"""

from __future__ import annotations

import gzip
import logging
from pathlib import Path

from .output import SitemapBundle

logger = logging.getLogger(__name__)


class FileStorage:
    """Writes named blobs under a base directory. OSError propagates unchanged."""

    def __init__(self, base_path: str | Path = "") -> None:
        self.base_path = Path(base_path) if base_path else Path(".")

    def path_for(self, name: str) -> Path:
        return self.base_path / name

    def persist(self, name: str, data: str | bytes) -> Path:
        path = self.path_for(name)
        raw = data.encode("utf-8") if isinstance(data, str) else data
        path.write_bytes(raw)
        logger.info("Wrote %s (%d bytes)", path, len(raw))
        return path

    def persist_compressed(self, name: str, data: str | bytes) -> Path:
        path = self.path_for(name)
        raw = data.encode("utf-8") if isinstance(data, str) else data
        path.write_bytes(gzip.compress(raw))
        logger.info("Wrote %s (%d bytes uncompressed)", path, len(raw))
        return path

    def read_text(self, name: str) -> str | None:
        path = self.path_for(name)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")


def write_bundle(bundle: SitemapBundle, storage: FileStorage) -> list[Path]:
    written: list[Path] = []
    artifacts = bundle.artifacts()
    for artifact in artifacts:
        if artifact.compressed:
            written.append(storage.persist_compressed(artifact.final_name, artifact.xml))
        else:
            written.append(storage.persist(artifact.final_name, artifact.xml))
    # A lone gzipped sitemap is also published uncompressed.
    if bundle.index is None and bundle.gzip_enabled:
        for artifact in artifacts:
            written.append(storage.persist(artifact.name, artifact.xml))
    return written
