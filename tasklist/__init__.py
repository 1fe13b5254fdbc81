"""tasklist - reactive task store with confirmation-gated deletion."""

__version__ = "0.1.0"
