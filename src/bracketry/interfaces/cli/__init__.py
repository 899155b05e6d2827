"""Typer command line application."""
