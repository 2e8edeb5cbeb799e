"""
Identity Domain - 身份认证领域
"""
