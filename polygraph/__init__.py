"""Node graphs for procedural mesh modelling, compiled into PolyAsm programs."""

__version__ = "0.1.0"