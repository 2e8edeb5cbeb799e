"""Health Domain - Domain Layer"""
