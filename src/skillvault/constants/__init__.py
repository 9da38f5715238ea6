"""Constant tables for Skillvault."""
