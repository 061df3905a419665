"""Line-oriented text editor in the style of EDLIN."""

__all__ = [
    "adapters",
    "buffer",
    "commands",
    "io",
    "runtime",
    "session",
]

__version__ = "0.1.0"
