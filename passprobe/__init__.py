"""
passprobe: checks how a SQL Server adapter and a migration CLI cope with
special characters in database passwords.
"""

__version__ = "0.1.0"
