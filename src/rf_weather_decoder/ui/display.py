"""Rich terminal display functions for decoded readings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from rf_weather_decoder.decoders.models import DecodedReading, DecodeOutcome

# Display labels and units for sink keys
FIELD_LABELS: dict[str, tuple[str, str]] = {
    "id": ("ID", ""),
    "channel": ("Channel", ""),
    "battery": ("Battery", ""),
    "battery_ok": ("Battery OK", ""),
    "temperature_C": ("Temperature", " C"),
    "humidity": ("Humidity", " %"),
    "wind_max_m_s": ("Wind Gust", " m/s"),
    "wind_avg_m_s": ("Wind Speed", " m/s"),
    "wind_dir_deg": ("Direction", " deg"),
    "rain_mm": ("Rain", " mm"),
    "light_klx": ("Light", " klx"),
    "uv": ("UV", ""),
    "unknown": ("Unknown", ""),
    "flags": ("Flags", ""),
    "mic": ("Integrity", ""),
}

# Global console instance
_console: Console | None = None


def get_console() -> Console:
    """Get the global rich console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def print_success(message: str, console: Console | None = None) -> None:
    """Print a success message."""
    (console or get_console()).print(f"[bold green]✓[/] {message}")


def print_warning(message: str, console: Console | None = None) -> None:
    """Print a warning message."""
    (console or get_console()).print(f"[bold yellow]⚠[/] {message}")


def print_error(message: str, console: Console | None = None) -> None:
    """Print an error message."""
    (console or get_console()).print(f"[bold red]✗[/] {message}")


def format_value(key: str, value: object) -> str:
    """Format a sink value with its unit.

    Args:
        key: Sink record key.
        value: Field value.

    Returns:
        Display string, e.g. ``"20.7 C"``.
    """
    _, unit = FIELD_LABELS.get(key, (key, ""))
    if isinstance(value, float):
        return f"{value:.1f}{unit}"
    return f"{value}{unit}"


def display_reading(reading: DecodedReading, console: Console | None = None) -> None:
    """Display one decoded reading in a rich table.

    Args:
        reading: Decoded reading.
        console: Console to print to. Defaults to the global console.
    """
    console = console or get_console()

    table = Table(
        title=f"[bold]{reading.model}[/]",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("Field", justify="left", style="dim")
    table.add_column("Value", justify="right", style="cyan")

    for key, value in reading.to_dict().items():
        if key == "model":
            continue
        label, _ = FIELD_LABELS.get(key, (key, ""))
        table.add_row(label, format_value(key, value))

    console.print(table)


def display_outcome(
    outcome: DecodeOutcome,
    code: str | None = None,
    console: Console | None = None,
) -> None:
    """Display the result of decoding one capture.

    Decoded outcomes are shown as a reading table; failures as a short
    panel with the final status.

    Args:
        outcome: Decode outcome.
        code: Optional bit code the outcome was decoded from.
        console: Console to print to. Defaults to the global console.
    """
    console = console or get_console()

    if outcome.reading is not None:
        display_reading(outcome.reading, console)
        return

    info = Text()
    if code:
        info.append("Code: ", style="dim")
        info.append(f"{code}\n", style="cyan")
    info.append("Last Variant: ", style="dim")
    info.append(f"{outcome.variant.value}\n", style="yellow")
    info.append("Status: ", style="dim")
    info.append(f"{outcome.status.value} ({outcome.code})", style="bold red")
    if outcome.detail:
        info.append(f"\n{outcome.detail}", style="dim")

    console.print(Panel(info, title="[bold]Not Decoded[/]", border_style="red"))
