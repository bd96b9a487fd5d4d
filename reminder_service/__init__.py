"""Django project package for the challenge reminder service."""
