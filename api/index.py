"""
Storefront - Vercel entry point.

Storage and session backends come from the environment
(CART_STORAGE_BACKEND, SESSION_BACKEND).
"""
from storefront.app import create_app

app = create_app()
