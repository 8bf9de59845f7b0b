"""boilergen: detect repository facts and generate boilerplate from them."""

__all__ = ["__version__"]

__version__ = "0.1.0"
