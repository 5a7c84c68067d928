"""Gym Check-in package.

This package is organized by feature modules (users, members, gyms, checkins,
analytics) with a thin Flask controller layer and service/repository layers.
"""
