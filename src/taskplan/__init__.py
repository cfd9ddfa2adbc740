"""taskplan: turn LLM-produced task plans into execution-ready steps."""

__version__ = "0.1.0"
