from __future__ import annotations


class OrfSetError(RuntimeError):
    """Base class for errors that abort a dataset run."""


class ConfigError(OrfSetError):
    """Raised when run options are out of range."""


class GenomeInputError(OrfSetError):
    """Raised when a genome file or directory cannot be read."""


class GeneticCodeError(OrfSetError):
    """Raised for a genetic code id with no translation table."""
