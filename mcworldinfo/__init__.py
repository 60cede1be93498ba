"""Inventory of Minecraft save directories"""

__version__ = "0.1.0"
