"""
SpyGuard: layered threat classification for mobile applications.

Labels application descriptors (permissions, data usage, background sensor
activity, package identity) as safe or as one of several threat categories,
using a threat database lookup, behavioral signals and permission heuristics.
"""

__version__ = "1.0.0"
__author__ = "SpyGuard Team"
