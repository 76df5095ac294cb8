"""
Combat system module for the ADR battle engine.

This module handles all combat mechanics including the elemental wheel,
monster scaling, to-hit and damage rolls, rewards, and the battle engine.
"""
