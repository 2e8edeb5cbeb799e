"""
Bootstrap - 应用启动

- config: Settings 与 load_settings
- main: create_app 应用工厂与命令行入口
"""
