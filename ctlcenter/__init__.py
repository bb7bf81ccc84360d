"""Pop-up control center for media, radios, notifications, brightness and volume."""

__version__ = "0.1.0"
__all__ = ["__version__"]