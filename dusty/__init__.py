"""Dusty: a chat bot that keeps track of where Dusty is in the building."""
