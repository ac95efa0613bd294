"""
Achievement Wall backend: achievements, likes, comments and image uploads.
"""
