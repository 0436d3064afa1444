# =======================================================================================
# campus_access/__init__.py - Package Initialization
# =======================================================================================
"""
Campus RFID Access Control - Admin Backend

Student directory, payment / card status, attendance and the card-tap
access decision behind the campus admin dashboard.
"""

__version__ = "1.0.0"
__author__ = "Campus Access Team"
