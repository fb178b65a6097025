"""
nix-timemach: browse NixOS system generations and diff them in the terminal.

Usage:
    nix-timemach --backend /path/to/nix-timemach-backend
    nix-timemach --demo

Components:
    - timemach.provider: backend access (subprocess and demo providers)
    - timemach.core: controller state machine, key routing, rendering
    - timemach.tui: Textual application
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
