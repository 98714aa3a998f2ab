"""Conversation engine: flows, presentation, dispatcher graph and services."""
