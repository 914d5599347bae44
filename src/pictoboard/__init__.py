"""
Pictoboard next-word suggestion package.

The package exposes the suggestion orchestrator used by the AAC symbol board, together with
the rule engine, the LLM-backed remote suggester, vocabulary access, and the HTTP/CLI surfaces.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
