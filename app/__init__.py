"""
TrackVerse Rankings 웹 애플리케이션
"""
