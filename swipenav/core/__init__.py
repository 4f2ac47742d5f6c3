"""Shared types, event bus and the gesture dispatcher."""
