"""
mc_launcher package
-------------------
Local Paper/Minecraft server manager.
Contains modules for settings, logging, version catalog, server download,
plugin handling, server.properties editing and the interactive action menu.
"""

__version__ = "0.1.0"
