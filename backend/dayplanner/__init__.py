"""
Dayplanner: event scheduling with weather-aware departure notifications.
"""
__version__ = "1.0.0"
