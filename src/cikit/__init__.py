"""cikit: shared continuous-integration targets for Go projects."""

__version__ = "0.4.0"
