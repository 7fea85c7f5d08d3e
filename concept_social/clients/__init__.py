"""Clients for systems outside the concept store."""
