"""Presentation layer - User interfaces."""
