"""Identity Domain - Infrastructure Layer"""
