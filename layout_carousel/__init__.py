"""Layout carousel for the niri window manager."""

from layout_carousel.__version__ import __version__

__all__ = ['__version__']
