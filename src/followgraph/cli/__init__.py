"""Command line interface for followgraph (``followgraph --help``)."""
