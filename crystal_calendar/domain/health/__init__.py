"""System health checks"""
