"""career-graph: personality-driven AI career and learning path advisor."""

__version__ = "0.1.0"
