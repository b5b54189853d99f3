"""
Last-Used Device Cache.

The CLI remembers the device URI (and page code) of the last successful
print in a small JSON file, so --device only has to be given once.
"""

import json
import time
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional, Union

from .page_codes import PageCode

DEFAULT_TTL_SECONDS = 24 * 60 * 60

CONFIG_DIR = Path.home() / ".config" / "posprinter"
CACHE_FILE_NAME = "last_printer"


@dataclass
class CachedDevice:
    """Device remembered from a previous run."""

    uri: str
    name: str
    last_used: float  # Unix timestamp
    page_code: Optional[str] = None

    @property
    def age(self) -> float:
        return time.time() - self.last_used

    def get_page_code(self) -> Optional[PageCode]:
        if self.page_code is None:
            return None
        return PageCode.from_name(self.page_code)


class DeviceCache:
    """JSON file holding the last used device."""

    def __init__(
        self,
        config_dir: Union[str, Path, None] = None,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
    ):
        self.path = Path(config_dir or CONFIG_DIR) / CACHE_FILE_NAME
        self.ttl_seconds = ttl_seconds

    def load(self) -> Optional[CachedDevice]:
        """
        Load the cached device.

        Returns:
            The cached device, or None if there is none, it has expired, or
            the file cannot be understood
        """
        if not self.path.exists():
            return None

        try:
            cached = CachedDevice(**json.loads(self.path.read_text()))
        except (OSError, json.JSONDecodeError, TypeError):
            return None

        if not isinstance(cached.last_used, (int, float)) or cached.age > self.ttl_seconds:
            return None
        if cached.page_code is not None and cached.page_code not in PageCode.__members__:
            return None
        return cached

    def save(self, uri: str, name: str, page_code: Optional[PageCode] = None) -> CachedDevice:
        """Remember a device, creating the config directory if needed."""
        cached = CachedDevice(
            uri=uri,
            name=name,
            last_used=time.time(),
            page_code=page_code.name if page_code is not None else None,
        )
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(asdict(cached), indent=2))
        return cached

    def clear(self) -> bool:
        """
        Forget the cached device.

        Returns:
            True if a cache file was removed
        """
        if self.path.exists():
            self.path.unlink()
            return True
        return False
