"""
Viral Chart - weekly leaderboard of viral AI content with rune rewards.

This package derives per-entry ranking metadata for a chart period and scores
content submissions in runes.
"""

__version__ = "0.1.0"
