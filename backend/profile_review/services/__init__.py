"""
Services package - credential store, profile fetcher, analysis engine and review pipeline
"""
