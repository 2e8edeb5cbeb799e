"""Assistant Domain - Domain Layer"""
