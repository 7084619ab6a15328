"""Concrete providers shipped with bitform."""
