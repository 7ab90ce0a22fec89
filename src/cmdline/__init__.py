"""Interactive filesystem command shell with zip pack/unpack."""

__version__ = "0.1.0"
