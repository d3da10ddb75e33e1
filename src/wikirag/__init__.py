"""wikirag - hybrid document retrieval for a team wiki."""

__version__ = "0.1.0"
