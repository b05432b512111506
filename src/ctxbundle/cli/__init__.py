"""Command-line interface for ctxbundle."""
