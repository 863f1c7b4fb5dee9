"""HTTP API routers and schemas"""
