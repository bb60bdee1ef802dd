"""
Module: __init__.py
Description:
    SeerrNotify engine: flag codec, REST client, user fetcher, sync driver and reporter.

Usage:
    Imported by other modules; not intended to be executed directly.

Notes:
    Reads configuration from `.env` through `syncer/config.py`.
"""
