"""ChatGPT handoff MCP server: copies a prompt to the clipboard and opens a ChatGPT deeplink."""

__version__ = "0.1.0"
