"""
SportNet Community Backend
"""
