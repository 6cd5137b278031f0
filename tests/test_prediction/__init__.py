"""
Tests for the Prediction Module

Test modules:
    - test_match_predictor: Tests for the Poisson match predictor
    - test_live: Tests for live match insights
    - test_report: Tests for the text report and JSON output
"""
