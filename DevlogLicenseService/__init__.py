"""
DEVLOG license server Django project.
"""
