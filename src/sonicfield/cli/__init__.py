"""Command-line interface (``sonicfield``)."""
