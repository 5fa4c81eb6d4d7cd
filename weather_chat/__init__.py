"""
Weather Planning Assistant

Conversational helper for interpreting historical weather-risk probabilities.
"""
__version__ = "1.0.0"
