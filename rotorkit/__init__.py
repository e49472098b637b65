"""Building blocks for antenna rotator controllers: clocks, RTC chips, GPS parsing, Moon position and state codes."""

__version__ = "0.1.0"
__all__ = ["constants", "moon", "pcf8583", "rtclib", "timelib", "tinygps"]