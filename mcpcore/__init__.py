"""Model Context Protocol types, content, tool, prompt and resource builders, and result helpers."""

__version__ = "0.1.0"
__all__ = [
    "content",
    "prompts",
    "protocol",
    "resources",
    "results",
    "tools",
]