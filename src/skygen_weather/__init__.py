"""SkyGen Weather: terminal weather dashboard with AI commentary."""

__version__ = "0.1.0"
