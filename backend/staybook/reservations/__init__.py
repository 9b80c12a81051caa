"""Reservation domain: record types, date arithmetic, and error taxonomy."""
