"""
Domains - 领域层

采用 DDD 4 层架构的领域模块：
- identity: 身份认证领域（注册、登录、授权门、API Key 加密存储）
- health: 健康档案领域（档案、症状日志）
- assistant: AI 助手领域（Gemini 代理）
"""
