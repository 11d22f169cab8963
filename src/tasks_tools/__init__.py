"""Google Tasks tools for AI agents, backed by a federated OAuth connection."""

__version__ = "0.1.0"
