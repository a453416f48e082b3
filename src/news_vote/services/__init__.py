# src/news_vote/services/__init__.py
"""Business logic services for the News Vote application."""
