"""
Content pipeline services: publication lifecycle, read providers, authoring
and comments.
"""
