"""
Services Layer
Search helpers shared by the interactive and one-shot report drivers.
"""
