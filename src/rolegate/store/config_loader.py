from __future__ import annotations

import hashlib
import json
import logging
import os
from typing import Any, Dict, Optional, Tuple

from ..core.builder import AccessConfig
from ..core.ports import ConfigSource

logger = logging.getLogger("rolegate.store")

_YAML_EXTS = (".yaml", ".yml")
_YAML_TYPES = ("application/yaml", "application/x-yaml", "text/yaml", "text/x-yaml")


def _detect_format(filename: Optional[str], content_type: Optional[str]) -> str:
    # Content-Type first, then file extension, then JSON.
    if content_type:
        ct = content_type.split(";", 1)[0].strip().lower()
        if ct in _YAML_TYPES:
            return "yaml"
        if ct == "application/json" or ct.endswith("+json"):
            return "json"
    if filename:
        lower = filename.lower()
        if lower.endswith(_YAML_EXTS):
            return "yaml"
        if lower.endswith(".json"):
            return "json"
    return "json"


def parse_config_text(
    text: str,
    *,
    filename: Optional[str] = None,
    content_type: Optional[str] = None,
) -> Dict[str, Any]:
    """Parse a JSON or YAML configuration document into a dict.

    Raises json.JSONDecodeError / yaml.YAMLError on malformed input, ImportError
    when YAML is requested without PyYAML, ValueError when the top level is not
    a mapping.
    """
    fmt = _detect_format(filename, content_type)
    if fmt == "yaml":
        import yaml  # type: ignore[import-untyped]

        data = yaml.safe_load(text)
        if data is None:
            data = {}
    else:
        data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"configuration top level must be a mapping, got {type(data).__name__}")
    return data


def load_config(path: str) -> AccessConfig:
    return AccessConfig.from_dict(FileConfigSource(path).load())


class FileConfigSource(ConfigSource):
    """Configuration document stored in a local JSON or YAML file.

    ``etag()`` is the SHA-256 of the file content (None if the file is
    missing); the hash is cached by ``(size, mtime_ns)``.
    """

    def __init__(self, path: str, *, chunk_size: int = 512 * 1024) -> None:
        self.path = path
        self._chunk_size = int(chunk_size)
        self._cached_stat_sig: Optional[Tuple[int, int]] = None
        self._cached_sha: Optional[str] = None

    def _stat_sig(self) -> Tuple[int, int]:
        st = os.stat(self.path)
        return (st.st_size, st.st_mtime_ns)

    def _hash_file(self) -> str:
        h = hashlib.sha256()
        with open(self.path, "rb") as f:
            for chunk in iter(lambda: f.read(self._chunk_size), b""):
                h.update(chunk)
        return h.hexdigest()

    def etag(self) -> Optional[str]:
        try:
            sig = self._stat_sig()
        except FileNotFoundError:
            self._cached_stat_sig = None
            self._cached_sha = None
            return None
        if self._cached_stat_sig != sig or self._cached_sha is None:
            self._cached_sha = self._hash_file()
            self._cached_stat_sig = sig
        return self._cached_sha

    def load(self) -> Dict[str, Any]:
        with open(self.path, "r", encoding="utf-8") as f:
            text = f.read()
        doc = parse_config_text(text, filename=self.path)
        logger.debug("rolegate: configuration read from %s", self.path)
        return doc


__all__ = ["parse_config_text", "load_config", "FileConfigSource"]
