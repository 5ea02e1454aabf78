"""
ALLY - accessibility assistance backend.
"""
