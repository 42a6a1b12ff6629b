"""City delivery ranking: pick a date window, list cities by delivery count."""

__version__ = "0.1.0"
