"""Claude and Gemini API models, tool-call state, schema cache, metrics and provider interface."""

__version__ = "0.2.1"
__all__ = ["cache", "claude", "errors", "gemini", "metrics", "provider", "state"]