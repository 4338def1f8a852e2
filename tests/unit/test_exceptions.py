from dynamodb_adapter.exceptions import (
    BatchRetryExceededError,
    DynamoDBAdapterError,
    EmptyKeysError,
    ItemNotFoundError,
    TooManyItemsError,
)


class TestDynamoDBAdapterError:
    """Test message and context rendering."""

    def test_message_only(self):
        error = DynamoDBAdapterError("boom")

        assert str(error) == "boom"
        assert error.context == {}

    def test_none_context_values_dropped(self):
        error = DynamoDBAdapterError("boom", context={'region': 'us-east-1', 'endpoint': None})

        assert error.context == {'region': 'us-east-1'}
        assert str(error) == "boom [region='us-east-1']"

    def test_original_error_type_rendered(self):
        error = DynamoDBAdapterError("boom", original_error=KeyError("x"))

        assert str(error) == "boom (caused by KeyError)"

    def test_repr(self):
        error = DynamoDBAdapterError("boom", context={'attempts': 3})

        assert repr(error) == "DynamoDBAdapterError('boom', context={'attempts': 3})"


class TestDomainExceptions:

    def test_item_not_found(self):
        error = ItemNotFoundError("test_accounts", {"id": "a1"})

        assert str(error) == "Item not found in table 'test_accounts' [table_name='test_accounts', key={'id': 'a1'}]"

    def test_too_many_items(self):
        error = TooManyItemsError("test_events", {"user_id": "u1"})

        assert isinstance(error, DynamoDBAdapterError)
        assert error.key == {"user_id": "u1"}
        assert "More than one item in table 'test_events'" in str(error)

    def test_batch_retry_exceeded(self):
        error = BatchRetryExceededError("test_accounts", unprocessed_count=4, attempts=5)

        assert str(error) == "BatchGet on 'test_accounts': retry limit exceeded [unprocessed=4, attempts=5]"

    def test_empty_keys_message(self):
        error = EmptyKeysError("test_accounts")

        assert error.message == "key empty"
        assert error.table_name == "test_accounts"
