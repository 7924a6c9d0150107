"""
API Routes Package

This module consolidates all API routes for the PayPal tools service.
"""

from fastapi import APIRouter

from . import checkout
from . import tools

# Versioned JSON API, mounted under /api/v1 by the application
router = APIRouter()
router.include_router(tools.router, prefix="/tools", tags=["tools"])

# Browser redirect pages live at the root, where PayPal sends the buyer
checkout_router = checkout.router

__all__ = ["router", "checkout_router"]
