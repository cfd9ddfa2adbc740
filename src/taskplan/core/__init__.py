"""Core domain and protocol interfaces."""
