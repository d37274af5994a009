"""Request/response schemas"""
