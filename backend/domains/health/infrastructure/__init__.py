"""Health Domain - Infrastructure Layer"""
