"""
Unit tests for the item sources.

Tests the in-memory source's list operations and change notifications, and
the DynamoDB-backed source against a moto table.
"""

from unittest.mock import Mock

import pytest
from botocore.exceptions import ClientError

from src.wheelspin.models.item import SelectableItem
from src.wheelspin.services.dynamodb_item_source import DynamoDBItemSource
from src.wheelspin.services.item_source import InMemoryItemSource
from tests.conftest import TEST_TABLE_NAME, make_items


class TestInMemoryItemSource:
    """Test cases for InMemoryItemSource."""

    def test_list_items_returns_copy(self, sample_items):
        source = InMemoryItemSource(sample_items)

        items = source.list_items()
        items.clear()

        assert len(source.list_items()) == 4

    def test_add_item_appends_and_notifies(self, sample_items):
        source = InMemoryItemSource(sample_items)
        listener = Mock()
        source.subscribe(listener)

        source.add_item(SelectableItem(id="e", label="E"))

        listener.assert_called_once()
        notified = listener.call_args.args[0]
        assert [item.label for item in notified] == ["A", "B", "C", "D", "E"]

    def test_add_item_at_position(self, sample_items):
        source = InMemoryItemSource(sample_items)

        source.add_item(SelectableItem(id="e", label="E"), position=0)

        assert source.list_items()[0].label == "E"

    def test_remove_item(self, sample_items):
        source = InMemoryItemSource(sample_items)
        listener = Mock()
        source.subscribe(listener)

        assert source.remove_item("item-1") is True
        assert source.remove_item("missing") is False

        assert [item.label for item in source.list_items()] == ["A", "C", "D"]
        listener.assert_called_once()

    def test_remove_item_with_duplicate_ids_removes_first(self):
        source = InMemoryItemSource(
            [SelectableItem(id="dup", label="First"), SelectableItem(id="dup", label="Second")]
        )

        source.remove_item("dup")

        assert [item.label for item in source.list_items()] == ["Second"]

    def test_move_item(self, sample_items):
        source = InMemoryItemSource(sample_items)

        assert source.move_item("item-0", 3) is True
        assert source.move_item("missing", 0) is False

        assert [item.label for item in source.list_items()] == ["B", "C", "D", "A"]

    def test_replace_items(self, sample_items):
        source = InMemoryItemSource(sample_items)
        listener = Mock()
        source.subscribe(listener)

        source.replace_items(make_items(["X"]))

        assert [item.label for item in source.list_items()] == ["X"]
        listener.assert_called_once()

    def test_subscribe_is_idempotent_and_unsubscribe(self, sample_items):
        source = InMemoryItemSource(sample_items)
        listener = Mock()

        source.subscribe(listener)
        source.subscribe(listener)
        source.add_item(SelectableItem(id="e", label="E"))
        source.unsubscribe(listener)
        source.unsubscribe(listener)
        source.add_item(SelectableItem(id="f", label="F"))

        listener.assert_called_once()


@pytest.mark.aws
class TestDynamoDBItemSource:
    """Test cases for DynamoDBItemSource against a moto table."""

    @pytest.fixture
    def source(self, mock_items_table):
        return DynamoDBItemSource(table_name=TEST_TABLE_NAME)

    def test_requires_table_name(self, monkeypatch):
        monkeypatch.delenv("WHEEL_ITEMS_TABLE", raising=False)

        with pytest.raises(ValueError):
            DynamoDBItemSource()

    def test_table_name_from_environment(self, mock_items_table, monkeypatch):
        monkeypatch.setenv("WHEEL_ITEMS_TABLE", TEST_TABLE_NAME)

        assert DynamoDBItemSource().table_name == TEST_TABLE_NAME

    def test_missing_table(self, mock_items_table):
        with pytest.raises(ValueError):
            DynamoDBItemSource(table_name="no-such-table")

    def test_empty_table(self, source):
        assert source.list_items() == []

    def test_items_come_back_in_position_order(self, source, sample_items):
        for item in sample_items:
            assert source.add_item(item) is True

        assert [item.label for item in source.list_items()] == ["A", "B", "C", "D"]

    @pytest.mark.parametrize("position", [0, 1, 3, -1, 10])
    def test_insert_position_matches_in_memory_source(self, source, sample_items, position):
        """Positions are list indexes on every source, so both wheels get the same order."""
        memory = InMemoryItemSource(sample_items)
        for item in sample_items:
            source.add_item(item)
        new_item = SelectableItem(id="z", label="Z")

        source.add_item(new_item, position=position)
        memory.add_item(new_item, position=position)

        assert [item.label for item in source.list_items()] == [
            item.label for item in memory.list_items()
        ]

    def test_positions_are_renumbered_densely(self, source, mock_items_table, sample_items):
        for item in sample_items:
            source.add_item(item)

        source.add_item(SelectableItem(id="z", label="Z"), position=1)

        rows = mock_items_table.scan()["Items"]
        assert sorted(int(row["position"]) for row in rows) == [0, 1, 2, 3, 4]

    def test_duplicate_ids_are_kept(self, source):
        source.add_item(SelectableItem(id="x", label="First"))
        source.add_item(SelectableItem(id="x", label="Second"))

        assert [item.label for item in source.list_items()] == ["First", "Second"]

    def test_remove_item_with_duplicate_ids_removes_first(self, source):
        source.add_item(SelectableItem(id="x", label="First"))
        source.add_item(SelectableItem(id="x", label="Second"))

        assert source.remove_item("x") is True

        assert [item.label for item in source.list_items()] == ["Second"]

    def test_metadata_is_stored(self, source):
        source.add_item(SelectableItem(id="m", label="M", metadata={"tag": "art", "score": 1.5}))

        item = source.list_items()[0]

        assert item.metadata["tag"] == "art"
        assert float(item.metadata["score"]) == 1.5

    def test_remove_item(self, source, sample_items):
        for item in sample_items:
            source.add_item(item)
        listener = Mock()
        source.subscribe(listener)

        assert source.remove_item("item-2") is True
        assert source.remove_item("item-2") is False

        assert [item.label for item in source.list_items()] == ["A", "B", "D"]
        listener.assert_called_once()

    def test_malformed_rows_are_skipped(self, source, mock_items_table):
        source.add_item(SelectableItem(id="ok", label="Fine"))
        mock_items_table.put_item(Item={"row_id": "bad-row", "id": "bad", "label": "   ", "position": 5})

        assert [item.id for item in source.list_items()] == ["ok"]

    def test_scan_errors_give_empty_list(self, source):
        error = ClientError({"Error": {"Code": "InternalServerError", "Message": "down"}}, "Scan")
        source.table = Mock()
        source.table.scan.side_effect = error

        assert source.list_items() == []

    def test_put_errors_return_false(self, source):
        error = ClientError({"Error": {"Code": "InternalServerError", "Message": "down"}}, "PutItem")
        source.table = Mock()
        source.table.scan.return_value = {"Items": []}
        source.table.put_item.side_effect = error
        listener = Mock()
        source.subscribe(listener)

        assert source.add_item(SelectableItem(id="x", label="X")) is False
        listener.assert_not_called()
