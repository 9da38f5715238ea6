"""Command-line interface for Skillvault."""
