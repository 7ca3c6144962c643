"""
ftb2pack: turns Feed The Beast modpack versions into portable modpack packages.
"""

__version__ = "0.2.0"
