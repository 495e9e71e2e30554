"""
Command-line interface for ecourtlookup.

This module provides CLI commands for:
- Browsing the state / district / court complex / court hierarchy
- Fetching cause lists for one court or a whole court complex
- Looking up case details by CNR
- Checking backend health and warming the credential cache

Usage:
    ecourtlookup courts states        # List states
    ecourtlookup cause-list bulk ...  # Cause lists for a court complex
    ecourtlookup case <CNR>           # Case details
"""

from .main import main

__all__ = ["main"]
