"""I/O for computed field results."""

from sonicfield.io.hdf5 import FieldResultReader, FieldResultWriter

__all__ = [
    "FieldResultWriter",
    "FieldResultReader",
]
