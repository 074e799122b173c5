"""Rental pricing and booking-admission engine."""

__version__ = "1.0.0"
