"""shopcatalog — REST backend for a product catalog."""

__version__ = "1.0.0"
