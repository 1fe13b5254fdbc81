"""Configuration, logging, errors, streams and storage primitives."""
