"""Kiosk domain - food waste scoring and kiosk session management.

Bounded context covering the waste score, the scale stability gate,
the kiosk session state machine and the leaderboard ranking.
"""
