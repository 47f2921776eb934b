"""Domain layer for the food waste kiosk.

Scoring, session flow and leaderboard rules, decoupled from the HTTP
surface and from the infrastructure adapters.
"""
