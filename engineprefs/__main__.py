"""Command line of engineprefs::

   $ python -m engineprefs --help

"""

from .cli import CLI

CLI()
