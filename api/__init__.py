"""
HTTP API for the Capture Normalizer
"""
