"""cinit -- scaffold, build and run a minimal Make-based C project."""

__version__ = "0.1.0"
