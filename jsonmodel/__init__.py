"""In-memory JSON values with equality, copying, UTF-8 checks and format-string pack/unpack."""

__version__ = "0.1.0"