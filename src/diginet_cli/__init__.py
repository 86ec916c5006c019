"""
DIGINET DNS CLI

Command-line interface for the DIGINET DNS API client.
"""
