"""
Payments module - Payment provider integration.

This module handles:
- Stripe webhook signature verification
- Extraction of the paying customer's email from checkout events
"""
