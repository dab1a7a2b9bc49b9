"""Booking use cases."""
