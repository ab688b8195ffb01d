"""
shapegen: generate typed Python clients from botocore service descriptions.
"""

__version__ = "0.1.0"
