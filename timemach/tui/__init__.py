"""
Textual front end for nix-timemach.

Usage:
    python -m timemach --demo

Components:
    - TimeMachApp: Main application class
    - CommandExecutorMixin: Background fetch workers
"""
