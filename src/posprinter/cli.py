"""
Command-Line Interface for ESC/POS Printers.

Usage:
    posprinter text "Hello"            - Print a line of text
    posprinter image IMAGE             - Print an image
    posprinter barcode DATA            - Print a 1D barcode
    posprinter qr DATA                 - Print a QR code
    posprinter status                  - Query printer status
    posprinter page-codes              - List page codes
    posprinter raw HEX                 - Send raw bytes

Every printing command takes --device (console, file:///dev/usb/lp0,
tcp://host[:port], serial:///dev/ttyUSB0?baudrate=N). Without it the last
device used is reused, falling back to the console. Progress messages go
to stderr so the console device can be piped.
"""

import logging
import re
import sys
from typing import Callable, Optional

import click

from .barcodes import BarcodeSystem
from .cache import DeviceCache
from .codes import QRCodeCorrectionLevel, QRCodeOption
from .connection import open_driver
from .errors import PrinterError
from .image import BitImageOption
from .options import PrinterOptions
from .page_codes import PageCode, has_page_code_table
from .printer import Printer
from .protocol import JustifyMode
from .status import RealTimeStatusRequest

DEVICE_URI_PATTERN = re.compile(
    r"^(console|file://\S+|tcp://[\w.\-]+(:\d{1,5})?|serial://\S+)$"
)

BARCODE_TYPES = {
    "ean13": BarcodeSystem.EAN13,
    "ean8": BarcodeSystem.EAN8,
    "upca": BarcodeSystem.UPCA,
    "upce": BarcodeSystem.UPCE,
    "code39": BarcodeSystem.CODE39,
    "codabar": BarcodeSystem.CODABAR,
    "itf": BarcodeSystem.ITF,
}


def validate_device_uri(ctx, param, value):
    """Validate device URI format.

    Accepts:
        - console
        - file:///path/to/device
        - tcp://host[:port]
        - serial:///dev/port[?baudrate=N]

    Raises:
        click.BadParameter: If the URI format is invalid
    """
    if value is None:
        return None
    if DEVICE_URI_PATTERN.match(value):
        return value
    raise click.BadParameter(
        f"Invalid device URI: '{value}'. "
        "Expected console, file:///path, tcp://host[:port] or serial:///port"
    )


def validate_page_code(ctx, param, value):
    """Convert a page code name, rejecting ones without a character table."""
    if value is None:
        return None
    try:
        code = PageCode.from_name(value)
    except PrinterError as e:
        raise click.BadParameter(str(e)) from None
    if not has_page_code_table(code):
        raise click.BadParameter(f"No character table available for page code {code}")
    return code


def resolve_device(device: Optional[str]) -> tuple[str, Optional[PageCode]]:
    """
    Use the given device, else the cached one, else the console.

    Returns:
        Device URI and the page code remembered with a cached device
    """
    if device is not None:
        return device, None
    cached = DeviceCache().load()
    if cached is not None:
        click.echo(f"Using cached device: {cached.name} ({cached.uri})", err=True)
        return cached.uri, cached.get_page_code()
    return "console", None


def run_job(
    ctx,
    device: Optional[str],
    job: Callable[[Printer], object],
    page_code: Optional[PageCode] = None,
):
    """
    Open the device, run a job against it, and remember the device on success.

    Without an explicit page code, the one cached with the device is used.
    """
    uri, cached_page_code = resolve_device(device)
    if page_code is None:
        page_code = cached_page_code

    try:
        driver = open_driver(uri)
    except PrinterError as e:
        click.echo(f"Device error: {e}", err=True)
        sys.exit(1)

    printer = Printer(driver, options=PrinterOptions(page_code=page_code))
    printer.set_debug(ctx.obj["debug"])

    try:
        result = job(printer)
    except PrinterError as e:
        click.echo(f"Printer error: {e}", err=True)
        sys.exit(1)
    finally:
        driver.close()

    if uri != "console":
        DeviceCache().save(uri, driver.name, page_code)
    return result


device_option = click.option(
    "--device",
    "-d",
    callback=validate_device_uri,
    help="Device URI (if omitted, uses the last device or the console)",
)


@click.group()
@click.option("--debug/--no-debug", default=False, help="Enable debug output")
@click.pass_context
def main(ctx, debug):
    """ESC/POS Printer CLI."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="[posprinter] %(message)s")


@main.command()
@click.argument("text")
@device_option
@click.option("--page-code", callback=validate_page_code, help="Page code, e.g. PC858")
@click.option("--bold", is_flag=True, help="Print in bold")
@click.option(
    "--justify",
    type=click.Choice(["left", "center", "right"]),
    default="left",
    help="Text alignment",
)
@click.option("--size", type=click.IntRange(1, 8), default=1, help="Text size multiplier (1-8)")
@click.option("--cut/--no-cut", default=True, help="Cut the paper afterwards")
@click.pass_context
def text(ctx, text, device, page_code, bold, justify, size, cut):
    """Print a line of text."""

    def _job(printer: Printer):
        printer.init().justify(JustifyMode[justify.upper()]).size(size, size)
        if bold:
            printer.bold(True)
        printer.writeln(text).feeds(2)
        if cut:
            printer.cut()
        printer.print()

    run_job(ctx, device, _job, page_code)
    click.echo("Print complete!", err=True)


@main.command("image")
@click.argument("image", type=click.Path(exists=True))
@device_option
@click.option(
    "--max-width",
    type=click.IntRange(8, 4096),
    default=512,
    help="Maximum width in dots, a multiple of 8 (default 512)",
)
@click.option("--cut/--no-cut", default=True, help="Cut the paper afterwards")
@click.pass_context
def print_image(ctx, image, device, max_width, cut):
    """Print an image file."""
    if max_width % 8 != 0:
        raise click.BadParameter("must be a multiple of 8", param_hint="--max-width")

    def _job(printer: Printer):
        printer.init().bit_image_option(image, BitImageOption(max_width=max_width, max_height=None))
        printer.feeds(2)
        if cut:
            printer.cut()
        printer.print()

    click.echo(f"Printing {image}...", err=True)
    run_job(ctx, device, _job)
    click.echo("Print complete!", err=True)


@main.command()
@click.argument("data")
@device_option
@click.option(
    "--type",
    "barcode_type",
    type=click.Choice(sorted(BARCODE_TYPES)),
    default="ean13",
    help="Barcode type (default: ean13)",
)
@click.pass_context
def barcode(ctx, data, device, barcode_type):
    """Print a 1D barcode."""

    def _job(printer: Printer):
        printer.init().justify(JustifyMode.CENTER)
        printer.barcode(BARCODE_TYPES[barcode_type], data, None)
        printer.feeds(2).print_cut()

    run_job(ctx, device, _job)
    click.echo("Print complete!", err=True)


@main.command()
@click.argument("data")
@device_option
@click.option("--size", type=click.IntRange(1, 15), default=4, help="Module size in dots (1-15)")
@click.option(
    "--level",
    type=click.Choice(["L", "M", "Q", "H"]),
    default="H",
    help="Error correction level (default: H)",
)
@click.pass_context
def qr(ctx, data, device, size, level):
    """Print a QR code."""
    option = QRCodeOption(size=size, correction_level=QRCodeCorrectionLevel[level])

    def _job(printer: Printer):
        printer.init().justify(JustifyMode.CENTER).qrcode_option(data, option)
        printer.feeds(2).print_cut()

    run_job(ctx, device, _job)
    click.echo("Print complete!", err=True)


@main.command()
@device_option
@click.option("--timeout", default=2.0, help="Read timeout in seconds")
@click.pass_context
def status(ctx, device, timeout):
    """Query printer and paper status."""
    requests = [RealTimeStatusRequest.PRINTER, RealTimeStatusRequest.ROLL_PAPER_SENSOR]

    readings = run_job(ctx, device, lambda printer: printer.read_status(requests, timeout))

    for reading in readings:
        click.echo(f"{reading.request}:")
        for flag, value in reading.flags.items():
            click.echo(f"  {flag}: {'yes' if value else 'no'}")


@main.command("page-codes")
def page_codes():
    """List page codes and whether text can be encoded for them."""
    for code in PageCode:
        table = "table" if has_page_code_table(code) else "raw only"
        click.echo(f"  {code.name:<12} {int(code):>3}  {table}")


@main.command()
@click.argument("hex_data")
@device_option
@click.option(
    "--force",
    is_flag=True,
    help="Skip the confirmation prompt",
)
@click.pass_context
def raw(ctx, hex_data, device, force):
    """Send raw hex data to the printer (for debugging/testing)."""
    try:
        data = bytes.fromhex(hex_data)
    except ValueError:
        click.echo("Invalid hex data!", err=True)
        sys.exit(1)

    if not force and not click.confirm(f"Send {len(data)} raw byte(s)?", err=True):
        click.echo("Aborted.", err=True)
        return

    run_job(ctx, device, lambda printer: printer.custom(data).print())


@main.command("clear-cache")
def clear_cache():
    """Forget the last used device."""
    if DeviceCache().clear():
        click.echo("Cached device cleared.")
    else:
        click.echo("No cached device.")


if __name__ == "__main__":
    main()
