"""
Domain layer for asset tracking.
Contains validation, lifecycle classification, currency conversion and the
in-memory repository, separated from loading and presentation concerns.
"""
