"""
Asset data entities and seed data sources.
"""
