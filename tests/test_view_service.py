import logging
import pytest
from unittest.mock import MagicMock, patch
from datetime import date
from decimal import Decimal
from sqlalchemy.exc import DataError, OperationalError, SQLAlchemyError

from church_inventory.clients import StoredPhoto
from church_inventory.models import (
    InventoryItem, MaintenanceRecord, AcquisitionRecord, ItemCategory, ItemStatus, ItemCondition
)
from church_inventory.repositories import InventoryRepository, MaintenanceRepository
from church_inventory.services import InventoryViewService, InventoryFilter, PhotoUpload, coerce_enum
from church_inventory.utils.exceptions import ItemNotFoundError, StoreUnavailableError, StorageError
from tests.conftest import create_test_inventory_item, create_test_maintenance_record, create_test_acquisition


@pytest.fixture
def storage_client():
    client = MagicMock()
    client.upload.return_value = StoredPhoto(
        name='a1b2c3.jpg',
        public_url='http://auth.test/storage/v1/object/public/item-photos/a1b2c3.jpg'
    )
    return client


@pytest.fixture
def service(db_session, storage_client):
    return InventoryViewService(storage_client=storage_client, read_retries=2, retry_delay=0)


def operational_error():
    return OperationalError('SELECT 1', {}, Exception('server closed the connection unexpectedly'))


def test_coerce_enum():
    assert coerce_enum(ItemStatus, 'Maintenance') == ItemStatus.UNDER_REPAIR
    assert coerce_enum(ItemCondition, ItemCondition.FAIR) == ItemCondition.FAIR
    assert coerce_enum(ItemCategory, None) is None
    with pytest.raises(ValueError):
        coerce_enum(ItemCategory, 'Kitchen')


class TestFetchInventory:
    """Test fetching the item list."""

    def test_empty_store(self, service):
        assert service.fetch_inventory() == []

    def test_newest_first_and_normalized(self, service, db_session):
        first = create_test_inventory_item(db_session, name='First')
        second = create_test_inventory_item(db_session, name='Second')

        items = service.fetch_inventory()

        # Same created_at falls back to id
        assert [item['id'] for item in items] == [second.id, first.id]
        assert items[0]['notes'] == ''
        assert items[0]['status'] == 'Available'

    def test_filters_by_status_and_condition(self, service, db_session):
        create_test_inventory_item(db_session, name='Mic')
        broken = create_test_inventory_item(
            db_session, name='Speaker', status=ItemStatus.UNDER_REPAIR, condition=ItemCondition.BROKEN
        )
        create_test_inventory_item(db_session, name='Amp', status=ItemStatus.UNDER_REPAIR)

        items = service.fetch_inventory(InventoryFilter(
            statuses=(ItemStatus.UNDER_REPAIR,),
            conditions=(ItemCondition.BROKEN, ItemCondition.NEEDS_REPAIR)
        ))

        assert [item['id'] for item in items] == [broken.id]

    def test_filters_by_category_and_orders_by_name(self, service, db_session):
        create_test_inventory_item(db_session, name='Zoom H4n', category=ItemCategory.AUDIO)
        create_test_inventory_item(db_session, name='Behringer X32', category=ItemCategory.AUDIO)
        create_test_inventory_item(db_session, name='Projector', category=ItemCategory.VIDEO)

        items = service.fetch_inventory(InventoryFilter(
            category=ItemCategory.AUDIO, order_by='name', ascending=True
        ))

        assert [item['name'] for item in items] == ['Behringer X32', 'Zoom H4n']

    def test_retries_transient_failures(self, db_session):
        repo = MagicMock()
        repo.find.side_effect = [operational_error(), [{'id': 1, 'name': 'Mic'}]]
        service = InventoryViewService(inventory_repo=repo, storage_client=MagicMock(), retry_delay=0)

        items = service.fetch_inventory()

        assert [item['id'] for item in items] == [1]
        assert repo.find.call_count == 2

    def test_gives_up_after_retries(self, db_session):
        repo = MagicMock()
        repo.find.side_effect = operational_error()
        service = InventoryViewService(
            inventory_repo=repo, storage_client=MagicMock(), read_retries=2, retry_delay=0
        )

        with pytest.raises(StoreUnavailableError):
            service.fetch_inventory()
        assert repo.find.call_count == 3


class TestAttachMaintenanceHistory:
    """Test joining items with their maintenance history."""

    def test_history_is_newest_first(self, service, db_session):
        item = create_test_inventory_item(db_session)
        older = create_test_maintenance_record(db_session, item, maintenance_date=date(2024, 1, 5))
        newer = create_test_maintenance_record(db_session, item, maintenance_date=date(2024, 4, 1))

        enriched = service.attach_maintenance_history({'id': item.id, 'name': item.name})

        assert [entry['id'] for entry in enriched['maintenance_history']] == [newer.id, older.id]
        assert enriched['latest_maintenance']['id'] == newer.id

    def test_same_day_records_newest_insertion_first(self, service, db_session):
        item = create_test_inventory_item(db_session)
        first = create_test_maintenance_record(db_session, item, maintenance_date=date(2024, 3, 3))
        second = create_test_maintenance_record(db_session, item, maintenance_date=date(2024, 3, 3))

        enriched = service.attach_maintenance_history({'id': item.id})

        assert [entry['id'] for entry in enriched['maintenance_history']] == [second.id, first.id]

    def test_no_history(self, service, db_session):
        item = create_test_inventory_item(db_session)

        enriched = service.attach_maintenance_history({'id': item.id})

        assert enriched['maintenance_history'] == []
        assert enriched['latest_maintenance'] is None

    def test_lookup_failure_degrades_to_empty_history(self, db_session):
        maintenance_repo = MagicMock()
        maintenance_repo.get_for_item.side_effect = SQLAlchemyError('relation does not exist')
        service = InventoryViewService(maintenance_repo=maintenance_repo, storage_client=MagicMock())
        item = {'id': 5, 'name': 'Mic'}

        enriched = service.attach_maintenance_history(item)

        assert enriched['maintenance_history'] == []
        assert enriched['latest_maintenance'] is None
        assert enriched['name'] == 'Mic'
        assert 'maintenance_history' not in item


class TestLogMaintenanceIssue:
    """Test logging maintenance and the resulting transitions."""

    def test_broken_moves_item_to_repair(self, service, db_session):
        item = create_test_inventory_item(db_session)

        result = service.log_maintenance_issue(item.id, {
            'maintenance_type': 'Broken',
            'description': 'Dropped off the stage',
            'cost': '75.25'
        })

        assert result['transitioned'] is True
        assert result['item']['status'] == 'Under Repair'
        assert result['item']['condition'] == 'Broken'
        assert result['record']['cost'] == 75.25
        assert result['record']['priority'] == 'Medium'

        stored = db_session.get(InventoryItem, item.id)
        assert stored.status == ItemStatus.UNDER_REPAIR
        assert stored.condition == ItemCondition.BROKEN
        assert MaintenanceRecord.query.filter_by(item_id=item.id).count() == 1

    def test_repair_needed(self, service, db_session):
        item = create_test_inventory_item(db_session, status=ItemStatus.IN_USE)

        result = service.log_maintenance_issue(item.id, {
            'maintenance_type': 'Repair Needed',
            'description': 'Crackles when moved'
        })

        assert result['item']['status'] == 'Under Repair'
        assert result['item']['condition'] == 'Needs Repair'

    def test_other_types_do_not_transition(self, service, db_session):
        item = create_test_inventory_item(db_session, status=ItemStatus.IN_USE, condition=ItemCondition.FAIR)

        result = service.log_maintenance_issue(item.id, {
            'maintenance_type': 'Routine Check',
            'description': 'All good'
        })

        assert result['transitioned'] is False
        assert result['item']['status'] == 'In Use'
        assert result['item']['condition'] == 'Fair'

    def test_unparseable_cost_is_zero(self, service, db_session):
        item = create_test_inventory_item(db_session)

        result = service.log_maintenance_issue(item.id, {
            'maintenance_type': 'Routine Check',
            'description': 'Cleaned',
            'cost': 'about ten dollars'
        })

        assert result['record']['cost'] == 0.0

    def test_unknown_item(self, service):
        with pytest.raises(ItemNotFoundError):
            service.log_maintenance_issue(999, {'maintenance_type': 'Broken', 'description': 'x'})

    @pytest.mark.parametrize('record', [
        {'description': 'No type'},
        {'maintenance_type': '  ', 'description': 'Blank type'},
        {'maintenance_type': 'Broken'},
    ])
    def test_required_fields(self, service, db_session, record):
        item = create_test_inventory_item(db_session)

        with pytest.raises(ValueError):
            service.log_maintenance_issue(item.id, record)

    def test_failed_item_update_rolls_back_record(self, db_session):
        item = create_test_inventory_item(db_session)
        inventory_repo = InventoryRepository()
        service = InventoryViewService(inventory_repo=inventory_repo, storage_client=MagicMock())

        with patch.object(inventory_repo, 'stage', side_effect=SQLAlchemyError('deadlock detected')):
            with pytest.raises(StoreUnavailableError):
                service.log_maintenance_issue(item.id, {
                    'maintenance_type': 'Broken',
                    'description': 'Cracked housing'
                })

        assert MaintenanceRecord.query.filter_by(item_id=item.id).count() == 0
        stored = db_session.get(InventoryItem, item.id)
        assert stored.status == ItemStatus.AVAILABLE
        assert stored.condition == ItemCondition.GOOD

    def test_out_of_range_cost_is_rejected_as_bad_input(self, db_session):
        item = create_test_inventory_item(db_session)
        maintenance_repo = MaintenanceRepository()
        service = InventoryViewService(maintenance_repo=maintenance_repo, storage_client=MagicMock())
        overflow = DataError('INSERT INTO inventory_item_maintenance', {}, Exception('numeric field overflow'))

        with patch.object(maintenance_repo, 'stage', side_effect=overflow):
            with pytest.raises(ValueError) as excinfo:
                service.log_maintenance_issue(item.id, {
                    'maintenance_type': 'Broken',
                    'description': 'Replaced the whole rig',
                    'cost': '1000000000'
                })

        assert 'numeric field overflow' in str(excinfo.value)
        assert db_session.get(InventoryItem, item.id).status == ItemStatus.AVAILABLE

    def test_failed_record_insert_leaves_item_untouched(self, db_session):
        item = create_test_inventory_item(db_session)
        maintenance_repo = MaintenanceRepository()
        service = InventoryViewService(maintenance_repo=maintenance_repo, storage_client=MagicMock())

        with patch.object(maintenance_repo, 'stage', side_effect=SQLAlchemyError('disk full')):
            with pytest.raises(StoreUnavailableError):
                service.log_maintenance_issue(item.id, {
                    'maintenance_type': 'Repair Needed',
                    'description': 'Loose jack'
                })

        stored = db_session.get(InventoryItem, item.id)
        assert stored.status == ItemStatus.AVAILABLE


class TestResolveItem:

    def test_resolve_returns_item_to_service(self, service, db_session):
        item = create_test_inventory_item(
            db_session, status=ItemStatus.UNDER_REPAIR, condition=ItemCondition.BROKEN
        )

        result = service.resolve_item(item.id)

        assert result['status'] == 'Available'
        assert result['condition'] == 'Good'
        assert result['last_checked'] == date.today().isoformat()

    def test_resolve_rejects_damaged_condition(self, service, db_session):
        item = create_test_inventory_item(db_session, status=ItemStatus.UNDER_REPAIR)

        with pytest.raises(ValueError):
            service.resolve_item(item.id, 'Broken')


class TestAddItem:
    """Test item creation and the photo upload compensation."""

    def test_add_item_without_photo(self, service, storage_client):
        item = service.add_item({'name': 'Hymnal', 'category': 'Other', 'quantity': 40})

        assert item['id'] is not None
        assert item['quantity'] == 40
        assert item['photo_url'] is None
        storage_client.upload.assert_not_called()

    def test_add_item_with_photo_and_price(self, service, storage_client, db_session):
        item = service.add_item(
            {'name': 'Camera', 'category': 'Video', 'purchase_price': '499.99', 'supplier': 'B&H'},
            photo=PhotoUpload(content=b'jpeg-bytes', filename='camera.JPG', content_type='image/jpeg')
        )

        assert item['photo_url'].endswith('/item-photos/a1b2c3.jpg')
        storage_client.upload.assert_called_once_with(b'jpeg-bytes', 'camera.JPG', 'image/jpeg')
        acquisition = AcquisitionRecord.query.filter_by(item_id=item['id']).one()
        assert acquisition.price == Decimal('499.99')
        assert acquisition.supplier == 'B&H'

    def test_failed_insert_deletes_uploaded_photo(self, db_session, storage_client):
        inventory_repo = InventoryRepository()
        service = InventoryViewService(inventory_repo=inventory_repo, storage_client=storage_client)

        with patch.object(inventory_repo, 'stage', side_effect=SQLAlchemyError('connection reset')):
            with pytest.raises(StoreUnavailableError):
                service.add_item({'name': 'Camera'}, photo=PhotoUpload(content=b'x', filename='c.jpg'))

        storage_client.delete.assert_called_once_with('a1b2c3.jpg')
        assert InventoryItem.query.count() == 0

    def test_failed_photo_cleanup_is_logged_for_reconciliation(self, db_session, storage_client, caplog):
        storage_client.delete.side_effect = StorageError('Photo delete rejected (500)', 500)
        inventory_repo = InventoryRepository()
        service = InventoryViewService(inventory_repo=inventory_repo, storage_client=storage_client)

        with caplog.at_level(logging.ERROR):
            with patch.object(inventory_repo, 'stage', side_effect=SQLAlchemyError('connection reset')):
                with pytest.raises(StoreUnavailableError):
                    service.add_item({'name': 'Camera'}, photo=PhotoUpload(content=b'x', filename='c.jpg'))

        assert 'reconcile: orphaned photo a1b2c3.jpg' in caplog.text

    def test_failed_upload_writes_nothing(self, service, storage_client, db_session):
        storage_client.upload.side_effect = StorageError('Photo upload rejected (413)', 413)

        with pytest.raises(StorageError):
            service.add_item({'name': 'Camera'}, photo=PhotoUpload(content=b'x', filename='c.jpg'))

        assert InventoryItem.query.count() == 0

    def test_name_required(self, service):
        with pytest.raises(ValueError):
            service.add_item({'category': 'Audio'})

    def test_negative_quantity_rejected(self, service):
        with pytest.raises(ValueError):
            service.add_item({'name': 'Chairs', 'quantity': -3})


class TestUpdateItem:

    def test_edits_persist(self, service, db_session):
        item = create_test_inventory_item(db_session, name='Old name')

        result = service.update_item(item.id, {
            'name': 'Wireless handheld',
            'location': 'Cabinet B',
            'condition': 'Fair',
            'status': 'Maintenance'
        })

        assert result['name'] == 'Wireless handheld'
        stored = db_session.get(InventoryItem, item.id)
        assert stored.location == 'Cabinet B'
        assert stored.condition == ItemCondition.FAIR
        assert stored.status == ItemStatus.UNDER_REPAIR

    def test_unknown_fields_rejected(self, service, db_session):
        item = create_test_inventory_item(db_session)

        with pytest.raises(ValueError):
            service.update_item(item.id, {'photo_url': 'http://elsewhere/x.jpg'})

    def test_empty_changes_rejected(self, service, db_session):
        item = create_test_inventory_item(db_session)

        with pytest.raises(ValueError):
            service.update_item(item.id, {})

    def test_unknown_item(self, service):
        with pytest.raises(ItemNotFoundError):
            service.update_item(404, {'name': 'Ghost'})


class TestReportsAndStats:

    def test_report_snapshot_reads_the_store(self, service, db_session):
        mic = create_test_inventory_item(db_session, name='Mic', quantity=3)
        broken = create_test_inventory_item(
            db_session, name='Projector', category=ItemCategory.VIDEO, condition=ItemCondition.BROKEN
        )
        create_test_maintenance_record(db_session, broken, cost=Decimal('80.00'))
        create_test_acquisition(db_session, mic, price=Decimal('150.00'))

        snapshot = service.get_report_snapshot()

        assert snapshot['total_items'] == 2
        assert snapshot['total_tracked_quantity'] == 4
        assert snapshot['needs_replacement_count'] == 1
        assert snapshot['total_asset_value'] == 150.0
        assert snapshot['maintenance_cost_ytd'] == 80.0
        assert snapshot['end_of_life_items'][0]['name'] == 'Projector'

    def test_dashboard_stats(self, service, db_session):
        item = create_test_inventory_item(db_session, quantity=5, status=ItemStatus.UNDER_REPAIR)
        create_test_inventory_item(db_session, quantity=2, condition=ItemCondition.BROKEN)
        create_test_maintenance_record(db_session, item, cost=Decimal('12.50'))
        create_test_maintenance_record(
            db_session, item, cost=Decimal('99.00'), maintenance_date=date(date.today().year - 1, 6, 1)
        )

        stats = service.get_dashboard_stats()

        assert stats['total_items'] == 2
        assert stats['total_tracked_quantity'] == 7
        assert stats['needs_maintenance_count'] == 2
        assert stats['needs_replacement_count'] == 1
        assert stats['total_asset_value'] == 0
        assert stats['maintenance_cost_ytd'] == 12.5
