"""
Controllers package initialization
"""

# Import all blueprints for registration
from church_inventory.api.controllers.inventory import inventory_bp
from church_inventory.api.controllers import maintenance  # noqa: F401  registers the maintenance namespace
from church_inventory.api.controllers.auth import auth_bp
from church_inventory.api.controllers.reports import reports_bp
from church_inventory.api.controllers.health import health_bp

__all__ = ['inventory_bp', 'auth_bp', 'reports_bp', 'health_bp']
