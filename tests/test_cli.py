"""Tests for the command-line interface."""

import pytest
from click.testing import CliRunner
from PIL import Image

from posprinter import cache
from posprinter.cli import main


@pytest.fixture(autouse=True)
def config_dir(tmp_path, monkeypatch):
    """Keep the device cache out of the home directory."""
    path = tmp_path / "config"
    monkeypatch.setattr(cache, "CONFIG_DIR", path)
    return path


@pytest.fixture
def runner():
    return CliRunner()


class TestText:
    """Test the text command."""

    def test_console_output(self, runner):
        result = runner.invoke(main, ["text", "Hello", "--device", "console"])

        assert result.exit_code == 0
        assert b"\x1b@" in result.stdout_bytes
        assert b"Hello\x1bd\x01" in result.stdout_bytes
        assert b"\x1dVA\x00" in result.stdout_bytes

    def test_no_cut(self, runner):
        result = runner.invoke(main, ["text", "Hello", "--no-cut"])
        assert result.exit_code == 0
        assert b"\x1dVA\x00" not in result.stdout_bytes

    def test_style_options(self, runner):
        result = runner.invoke(main, ["text", "Hi", "--bold", "--justify", "center", "--size", "2"])
        assert result.exit_code == 0
        assert b"\x1ba\x01" in result.stdout_bytes
        assert b"\x1d!\x11" in result.stdout_bytes
        assert b"\x1bE\x01" in result.stdout_bytes

    def test_page_code(self, runner):
        result = runner.invoke(main, ["text", "€", "--page-code", "pc858"])
        assert result.exit_code == 0
        assert b"\x1bt\x13" in result.stdout_bytes
        assert b"\xd5\x1bd\x01" in result.stdout_bytes

    def test_page_code_without_table(self, runner):
        result = runner.invoke(main, ["text", "x", "--page-code", "KATAKANA"])
        assert result.exit_code == 2
        assert "No character table" in result.output

    def test_invalid_device(self, runner):
        result = runner.invoke(main, ["text", "x", "--device", "bluetooth:AA:BB"])
        assert result.exit_code == 2
        assert "Invalid device URI" in result.output


class TestDeviceCache:
    """Test remembering the last device."""

    def test_file_device_is_cached(self, runner, tmp_path):
        out = tmp_path / "out.bin"

        result = runner.invoke(main, ["text", "Hi", "--device", f"file://{out}"])
        assert result.exit_code == 0
        assert b"Hi" in out.read_bytes()

        out.unlink()
        result = runner.invoke(main, ["text", "Again"])
        assert result.exit_code == 0
        assert "Using cached device" in result.output
        assert b"Again" in out.read_bytes()

    def test_cached_page_code_is_used(self, runner, tmp_path):
        out = tmp_path / "out.bin"
        runner.invoke(main, ["text", "€", "--page-code", "pc858", "--device", f"file://{out}"])

        out.unlink()
        result = runner.invoke(main, ["text", "€"])
        assert result.exit_code == 0
        assert "Using cached device" in result.output
        data = out.read_bytes()
        assert b"\x1bt\x13" in data
        assert b"\xd5" in data

    def test_explicit_page_code_overrides_cache(self, runner, tmp_path):
        out = tmp_path / "out.bin"
        runner.invoke(main, ["text", "€", "--page-code", "pc858", "--device", f"file://{out}"])

        out.unlink()
        result = runner.invoke(main, ["text", "é", "--page-code", "pc850"])
        assert result.exit_code == 0
        assert b"\x1bt\x02" in out.read_bytes()

    def test_console_is_not_cached(self, runner, config_dir):
        runner.invoke(main, ["text", "Hi"])
        assert not (config_dir / cache.CACHE_FILE_NAME).exists()

    def test_clear_cache(self, runner, tmp_path):
        runner.invoke(main, ["text", "Hi", "--device", f"file://{tmp_path / 'out.bin'}"])

        result = runner.invoke(main, ["clear-cache"])
        assert "Cached device cleared." in result.output

        result = runner.invoke(main, ["clear-cache"])
        assert "No cached device." in result.output


class TestCodes:
    """Test the barcode and qr commands."""

    def test_barcode(self, runner):
        result = runner.invoke(main, ["barcode", "4006381333931"])
        assert result.exit_code == 0
        assert b"\x1dk\x024006381333931\x00" in result.stdout_bytes

    def test_barcode_type(self, runner):
        result = runner.invoke(main, ["barcode", "ABC-1", "--type", "code39"])
        assert result.exit_code == 0
        assert b"\x1dk\x04ABC-1\x00" in result.stdout_bytes

    def test_invalid_barcode(self, runner):
        result = runner.invoke(main, ["barcode", "123"])
        assert result.exit_code == 1
        assert "Printer error: Invalid EAN13 data" in result.output

    def test_qr(self, runner):
        result = runner.invoke(main, ["qr", "hello", "--size", "6", "--level", "M"])
        assert result.exit_code == 0
        assert b"\x1d(k\x03\x001C\x06" in result.stdout_bytes
        assert b"\x1d(k\x03\x001E1" in result.stdout_bytes
        assert b"\x1d(k\x08\x001P0hello" in result.stdout_bytes


class TestImage:
    """Test the image command."""

    def test_print_image(self, runner, tmp_path):
        path = tmp_path / "logo.png"
        Image.new("L", (16, 2), 0).save(path)

        result = runner.invoke(main, ["image", str(path)])

        assert result.exit_code == 0
        assert b"\x18\x1dv0\x00\x02\x00\x02\x00\xff\xff\xff\xff" in result.stdout_bytes

    def test_max_width_multiple_of_8(self, runner, tmp_path):
        path = tmp_path / "logo.png"
        Image.new("L", (16, 2), 0).save(path)

        result = runner.invoke(main, ["image", str(path), "--max-width", "100"])

        assert result.exit_code == 2
        assert "multiple of 8" in result.output

    def test_invalid_image(self, runner, tmp_path):
        path = tmp_path / "logo.png"
        path.write_bytes(b"not an image")

        result = runner.invoke(main, ["image", str(path)])

        assert result.exit_code == 1
        assert "Printer error: Failed to load image" in result.output


class TestStatus:
    """Test the status command."""

    def test_console_has_no_replies(self, runner):
        result = runner.invoke(main, ["status"])
        assert result.exit_code == 1
        assert "Expected 2 status byte(s), received 0" in result.output

    def test_decoded_flags(self, runner, mocker):
        mocker.patch("posprinter.connection.ConsoleDriver.read", return_value=b"\x12\x12")

        result = runner.invoke(main, ["status"])

        assert result.exit_code == 0
        assert "printer:" in result.output
        assert "  online: yes" in result.output
        assert "  roll_paper_end_sensor_paper_present: yes" in result.output


class TestMisc:
    """Test the page-codes and raw commands."""

    def test_page_codes(self, runner):
        result = runner.invoke(main, ["page-codes"])
        assert result.exit_code == 0
        assert "PC437" in result.output
        assert "raw only" in result.output

    def test_raw(self, runner):
        result = runner.invoke(main, ["raw", "1b40", "--force"])
        assert result.exit_code == 0
        assert result.stdout_bytes.endswith(b"\x1b@")

    def test_raw_invalid_hex(self, runner):
        result = runner.invoke(main, ["raw", "zz", "--force"])
        assert result.exit_code == 1
        assert "Invalid hex data!" in result.output

    def test_raw_declined(self, runner):
        result = runner.invoke(main, ["raw", "1b40"], input="n\n")
        assert "Aborted." in result.output
        assert b"\x1b@" not in result.stdout_bytes
