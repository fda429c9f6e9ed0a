"""
Basecore - shared infrastructure

Settings, logging, database sessions and Redis access used by the
messaging engines. Nothing in here knows about a specific channel.
"""
