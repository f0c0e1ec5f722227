"""Huddle chat backend: users, friendships, rooms and notifications."""

__version__ = "0.1.0"
