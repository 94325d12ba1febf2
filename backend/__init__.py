"""
HTTP backend for the quote converter
"""
