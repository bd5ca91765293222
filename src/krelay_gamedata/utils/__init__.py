"""Utility helpers for krelay-gamedata."""
