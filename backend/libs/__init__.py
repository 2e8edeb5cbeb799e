"""
Libs - 共享组件库

提供跨领域使用的技术组件，非业务逻辑。

子模块：
- api: API 依赖注入
- config: 配置接口
- db: 数据库组件
- llm: AI 客户端
- middleware: 中间件
- orm: ORM 基类
"""
