"""
Movix backend: video index, folder browser and search API.
"""
