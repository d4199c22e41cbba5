"""covgate - coverage and mutation report analysis for quality gates."""

__version__ = "0.1.0"
