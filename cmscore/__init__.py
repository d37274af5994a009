"""CMS core: category tree and slug namespace services"""

__version__ = "1.0.0"
