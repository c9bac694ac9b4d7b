"""CLI 场景流水线"""
