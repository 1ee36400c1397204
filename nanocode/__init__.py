"""Message types, provider interface, agent profiles, JSON-defined tools and debug logging for tool-calling AI agents."""

__version__ = "0.1.0"