"""
Football Analytics Engine

Statistics and prediction for football (soccer) matches: team form and
strength, league tables and season trends, player and referee analytics,
backed by the FootyStats API.
"""

__version__ = "0.1.0"
__author__ = "Football Analytics Team"
