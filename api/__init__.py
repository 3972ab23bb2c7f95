"""API package - FastAPI routers, dependencies and middleware"""
