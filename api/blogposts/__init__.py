"""
Blog post feature: entity, DTOs, data store and HTTP routes.
"""
