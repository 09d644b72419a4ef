"""
Core modules for SQL splitting
"""
