"""
Web search form for Bill Search Tool
"""
