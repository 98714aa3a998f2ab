"""orderrouter - conversational ordering assistant for messaging channels."""

__version__ = "0.1.0"
