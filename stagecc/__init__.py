"""A staged compiler for a small subset of C targeting x86-64 assembly."""

__version__ = "0.1.0"