"""LocationIQ geocoding provider adapter."""

__version__ = "0.1.0"
