"""
Health Domain - 健康档案领域

用户健康档案与症状日志，数据按已认证身份隔离。
"""
