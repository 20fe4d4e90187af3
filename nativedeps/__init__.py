"""Native dependency control — keeps mobile build manifests in sync with enabled features."""

__version__ = "0.1.0"
