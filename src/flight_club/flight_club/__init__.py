"""Flight club package.

Scheduling and membership management for a flight-simulator training club,
organized by feature modules (users, schedules, notices, ...) with a thin
Flask controller layer over service/repository layers.
"""
