"""
API Module

FastAPI application serving games and pursuer decisions.
"""
