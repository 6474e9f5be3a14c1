"""locsync: keep locale JSON trees in step with a reference locale."""

__version__ = "1.0.0"
