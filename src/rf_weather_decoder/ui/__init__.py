"""Rich terminal UI components for RF Weather Decoder."""

from rf_weather_decoder.ui.display import (
    display_outcome,
    display_reading,
    format_value,
    print_error,
    print_success,
    print_warning,
)

__all__ = [
    "display_outcome",
    "display_reading",
    "format_value",
    "print_error",
    "print_success",
    "print_warning",
]
