"""Shared exceptions, constants and helpers for the domain modules."""
