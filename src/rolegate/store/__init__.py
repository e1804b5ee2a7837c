from __future__ import annotations

from .config_loader import FileConfigSource, load_config, parse_config_text

__all__ = ["FileConfigSource", "load_config", "parse_config_text"]
