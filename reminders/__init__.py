"""Scheduled challenge reminders: storage, scheduling, and background delivery."""
