"""
Food Volume Gateway.
Routes food images through volume-estimation and classification services.
"""

__version__ = "1.0.0"
