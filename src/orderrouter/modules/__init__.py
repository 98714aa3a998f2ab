"""Pluggable collaborators: catalog stores, responders, transports."""
