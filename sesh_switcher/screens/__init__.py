"""Screens for the switcher app."""
