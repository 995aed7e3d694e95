"""
Input data models and normalization module.

Immutable records for price histories and fund compositions as delivered,
already deserialized, by the quote and fund-data collaborators.
"""
