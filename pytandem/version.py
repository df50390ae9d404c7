"""
version - pytandem version information
======================================

Constants
---------

  :py:const:`version` - a string with the current version.

"""

__version__ = '1.0.0'

version = __version__
