"""Lorekeeper: a visibility-aware API for fantasy characters and their world."""
