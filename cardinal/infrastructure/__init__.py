"""Infrastructure - environment settings"""
