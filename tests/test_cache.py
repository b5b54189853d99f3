"""Tests for the last-used device cache."""

import json
import time

import pytest

from posprinter import PageCode
from posprinter.cache import CACHE_FILE_NAME, DeviceCache


@pytest.fixture
def cache(tmp_path):
    return DeviceCache(config_dir=tmp_path)


class TestDeviceCache:
    """Test saving, loading and expiring the cached device."""

    def test_empty(self, cache):
        assert cache.load() is None

    def test_save_and_load(self, cache, tmp_path):
        cache.save("tcp://192.168.1.100", "network (192.168.1.100:9100)", PageCode.PC858)

        cached = cache.load()
        assert cached.uri == "tcp://192.168.1.100"
        assert cached.name == "network (192.168.1.100:9100)"
        assert cached.get_page_code() == PageCode.PC858
        assert (tmp_path / CACHE_FILE_NAME).exists()

    def test_save_without_page_code(self, cache):
        cache.save("file:///dev/usb/lp0", "file")
        assert cache.load().get_page_code() is None

    def test_creates_config_dir(self, tmp_path):
        cache = DeviceCache(config_dir=tmp_path / "nested" / "dir")
        cache.save("console", "console")
        assert cache.path.exists()

    def test_expired(self, tmp_path):
        cache = DeviceCache(config_dir=tmp_path, ttl_seconds=60)
        cache.save("tcp://printer", "network")

        data = json.loads(cache.path.read_text())
        data["last_used"] = time.time() - 120
        cache.path.write_text(json.dumps(data))

        assert cache.load() is None

    @pytest.mark.parametrize(
        "content",
        [
            "not json",
            json.dumps({"uri": "tcp://printer"}),
            json.dumps({"uri": "tcp://printer", "name": "x", "last_used": "yesterday"}),
            json.dumps({"uri": "tcp://printer", "name": "x", "last_used": 1.0, "extra": 1}),
        ],
    )
    def test_corrupt_file(self, cache, content):
        cache.path.write_text(content)
        assert cache.load() is None

    def test_unknown_page_code(self, cache):
        data = {"uri": "tcp://printer", "name": "x", "last_used": time.time(), "page_code": "PC9"}
        cache.path.write_text(json.dumps(data))
        assert cache.load() is None

    def test_clear(self, cache):
        cache.save("tcp://printer", "network")
        assert cache.clear() is True
        assert cache.load() is None
        assert cache.clear() is False
