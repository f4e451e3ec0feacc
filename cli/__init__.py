"""
Command-line interface for Bill Search Tool
"""
