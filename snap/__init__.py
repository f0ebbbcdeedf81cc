"""Snap: resize screenshots for the App Store or drop them into an iPhone frame."""

__version__ = "1.0.0"
