"""
CommentSense
Heuristic comment and video analytics engine
"""

__version__ = "0.1.0"
