"""
Folio site: a server-rendered portfolio website backed by a headless
content API.
"""

__version__ = "1.0.0"
