"""
Normalization module for event submissions.

This package provides:
- HeaderAliasMapper: first-matching-alias header probing
- Field parsers: team size, prizes, dates, fees, category, department, coordinators
- EventRowNormalizer: raw row -> EventRecord
"""
