"""
Assistant Domain - AI 助手领域

使用用户自己的 Gemini Key 生成饮食计划、食物检查、诱因分析和食谱建议。
"""
