"""Shared test doubles for the certificate governance suite."""
