"""sheetgraph — one-hop dependency diagrams for measure-sheet exports."""

__version__ = "0.1.0"
