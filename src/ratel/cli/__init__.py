"""Ratel command-line interface."""
