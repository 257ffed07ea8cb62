"""
Core module for shared domain infrastructure.

This module contains:
- Domain exceptions and value objects
- The key-value store port and its adapters
- Middleware, metrics and health views
"""
