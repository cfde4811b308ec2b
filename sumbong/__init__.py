"""
Sumbong - community crime reporting map for Barangay Parian, Calamba City.
"""

__version__ = "1.0.0"
