import os
import pytest
from unittest.mock import MagicMock
from datetime import date
from decimal import Decimal

# Set test environment variables before importing the app
os.environ['FLASK_ENV'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite:///:memory:'

from church_inventory import create_app
from church_inventory.clients import StoredPhoto
from church_inventory.models import (
    db, InventoryItem, MaintenanceRecord, AcquisitionRecord,
    ItemCategory, ItemStatus, ItemCondition, Priority
)


@pytest.fixture(scope='session')
def app():
    """Create application for the tests."""
    app = create_app('testing')

    with app.app_context():
        # Create all database tables
        db.create_all()
        yield app
        # Clean up
        db.drop_all()


@pytest.fixture
def client(app):
    """A test client for the app."""
    return app.test_client()


@pytest.fixture
def db_session(app):
    """Create a database session for a test."""
    with app.app_context():
        db.create_all()

        yield db.session

        # Clean up tables
        db.session.rollback()
        for table in reversed(db.metadata.sorted_tables):
            db.session.execute(table.delete())
        db.session.commit()


@pytest.fixture
def mock_auth_client(app):
    """Replace the auth provider client for the duration of a test."""
    mock_client = MagicMock()
    app.extensions['auth_client'] = mock_client
    yield mock_client
    app.extensions.pop('auth_client', None)


@pytest.fixture
def mock_storage_client(app):
    """Replace the photo store client for the duration of a test."""
    mock_client = MagicMock()
    mock_client.upload.return_value = StoredPhoto(
        name='3f2a9c.jpg',
        public_url='http://auth.test/storage/v1/object/public/item-photos/3f2a9c.jpg'
    )
    app.extensions['photo_storage'] = mock_client
    yield mock_client
    app.extensions.pop('photo_storage', None)


@pytest.fixture
def sample_inventory_item(db_session):
    """Create a sample inventory item for testing."""
    item = InventoryItem(
        name='Shure SM58 Microphone',
        category=ItemCategory.AUDIO,
        quantity=4,
        status=ItemStatus.AVAILABLE,
        condition=ItemCondition.GOOD,
        brand='Shure',
        model='SM58',
        location='Sound booth'
    )
    db_session.add(item)
    db_session.commit()
    return item


@pytest.fixture
def auth_headers():
    """Mock authentication headers for testing."""
    return {
        'Authorization': 'Bearer test-token',
        'Content-Type': 'application/json'
    }


# Helper functions for tests
def create_test_inventory_item(db_session, **kwargs):
    """Create a test inventory item with default values."""
    defaults = {
        'name': 'Test Item',
        'category': ItemCategory.AUDIO,
        'quantity': 1,
        'status': ItemStatus.AVAILABLE,
        'condition': ItemCondition.GOOD
    }
    defaults.update(kwargs)

    item = InventoryItem(**defaults)
    db_session.add(item)
    db_session.commit()
    return item


def create_test_maintenance_record(db_session, inventory_item, **kwargs):
    """Create a test maintenance record with default values."""
    defaults = {
        'item_id': inventory_item.id,
        'maintenance_type': 'Routine Check',
        'priority': Priority.MEDIUM,
        'maintenance_date': date.today(),
        'performed_by': 'Tech Team',
        'description': 'Test maintenance',
        'cost': Decimal('0.00')
    }
    defaults.update(kwargs)

    record = MaintenanceRecord(**defaults)
    db_session.add(record)
    db_session.commit()
    return record


def create_test_acquisition(db_session, inventory_item, **kwargs):
    """Create a test acquisition record with default values."""
    defaults = {
        'item_id': inventory_item.id,
        'price': Decimal('100.00'),
        'acquired_on': date.today(),
        'supplier': 'Test Supplier'
    }
    defaults.update(kwargs)

    acquisition = AcquisitionRecord(**defaults)
    db_session.add(acquisition)
    db_session.commit()
    return acquisition


# Test data generators
def generate_item_data(**kwargs):
    """Generate inventory item request data."""
    defaults = {
        'name': 'Yamaha Keyboard',
        'category': 'Instruments',
        'quantity': 1,
        'status': 'Available',
        'condition': 'Good',
        'brand': 'Yamaha',
        'model': 'P-45',
        'location': 'Main hall'
    }
    defaults.update(kwargs)
    return defaults


def generate_maintenance_data(item_id, **kwargs):
    """Generate maintenance issue request data."""
    defaults = {
        'item_id': item_id,
        'maintenance_type': 'Routine Check',
        'priority': 'Medium',
        'description': 'Checked cables and connectors',
        'performed_by': 'Tech Team',
        'cost': '0'
    }
    defaults.update(kwargs)
    return defaults
