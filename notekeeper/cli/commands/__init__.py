"""
CLI Commands.

Organized by domain/feature area.
"""
