"""Presentation helpers: palettes and the rich console front end."""
