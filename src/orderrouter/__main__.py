"""Orderrouter CLI entry point.

Chat with the assistant in the terminal:
    python -m orderrouter chat
"""

from orderrouter.cli.app import cli

if __name__ == "__main__":
    cli()
