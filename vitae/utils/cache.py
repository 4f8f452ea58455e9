"""
Resolved-person cache.

Stores the fully resolved person record (projects merged and sorted, citations
rendered to plain text) keyed by a fingerprint of the input file, so a rerun on
unchanged input skips every network fetch.

Usage:
    from vitae.utils.cache import YAMLFileCache, fingerprint

    cache = YAMLFileCache(Path(".vitae-cache"))
    key = fingerprint(input_path.read_bytes())
    data = cache.get(key)
"""

import hashlib
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException


def fingerprint(content: bytes) -> str:
    """Return the SHA-256 hex digest used as the cache key for an input file."""
    return hashlib.sha256(content).hexdigest()


class MemoryCache:
    """Dict-backed cache, used by tests and for one-shot builds."""

    def __init__(self):
        self._entries: Dict[str, Dict[str, Any]] = {}

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        return self._entries.get(key)

    def put(self, key: str, data: Dict[str, Any]) -> None:
        self._entries[key] = data

    def __contains__(self, key: str) -> bool:
        return key in self._entries


class YAMLFileCache:
    """
    Directory of YAML files, one per fingerprint.

    Entries are written in the same schema as the input person record.
    """

    def __init__(self, cache_dir: Path):
        self.cache_dir = cache_dir

    def path_for(self, key: str) -> Path:
        return self.cache_dir / f"{key}.yaml"

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Cached data for `key`; unreadable or non-mapping entries count as a miss."""
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            data = OmegaConf.to_container(OmegaConf.load(path), resolve=False)
        except (yaml.YAMLError, OmegaConfBaseException) as e:
            logger.warning(f"Ignoring unreadable cache entry {path}: {e}")
            return None
        if not isinstance(data, dict):
            logger.warning(f"Ignoring cache entry {path}: not a mapping")
            return None
        return data

    def put(self, key: str, data: Dict[str, Any]) -> None:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        content = OmegaConf.to_yaml(OmegaConf.create(data))

        # Write to temp file first (atomic write pattern)
        temp_fd, temp_path = tempfile.mkstemp(suffix=".yaml", dir=self.cache_dir, text=True)
        try:
            with os.fdopen(temp_fd, "w", encoding="utf-8") as f:
                f.write(content)
            shutil.move(temp_path, self.path_for(key))
        except Exception:
            if os.path.exists(temp_path):
                os.unlink(temp_path)
            raise

    def __contains__(self, key: str) -> bool:
        return self.path_for(key).exists()
