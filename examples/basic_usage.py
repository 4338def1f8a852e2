#!/usr/bin/env python3
"""
Basic usage examples for the DynamoDB adapter.

This example walks through:
1. Setting up configuration and connecting
2. Creating tables from entity metadata
3. Writing, reading and deleting items
4. Range, index and count queries
5. Manual paging and batch reads
6. A filtered maintenance scan

Run against DynamoDB Local (``docker run -p 8000:8000 amazon/dynamodb-local``).
"""

from typing import Optional

from pydantic import BaseModel

from dynamodb_adapter import (
    DynamoDBConfig,
    IndexDefinition,
    KeyDescriptor,
    Operator,
    Order,
    PagedRequest,
    PageKey,
    ScanFilter,
    TableMeta,
    create_dynamodb,
)


class Purchase(BaseModel):
    customer_id: str
    placed_at: str
    total: int
    status: str = "open"
    note: Optional[str] = None

    class Meta(TableMeta):
        partition_key = "customer_id"
        sort_key = "placed_at"
        local_indexes = [IndexDefinition(name="TotalIndex", sort_key="total")]


def main():
    """Demonstrate basic usage of the DynamoDB adapter."""

    # 1. Configure and connect
    print("1. Connecting to DynamoDB Local...")
    config = DynamoDBConfig.for_local_development()
    # For AWS, rely on environment variables instead:
    # config = DynamoDBConfig.from_env()
    db = create_dynamodb(config)

    # 2. Create the table if needed
    print("2. Creating table...")
    if not db.exists_table("orders"):
        db.create_table("orders", Purchase, wait=True)

    # 3. Write and read
    print("3. Writing purchases...")
    for day, total in enumerate([120, 45, 300, 80, 15], start=1):
        db.put("orders", Purchase(customer_id="c-1", placed_at=f"2024-03-{day:02d}", total=total))

    first = db.get("orders", KeyDescriptor.for_hash("customer_id", "c-1").with_range("placed_at", "2024-03-01"), model=Purchase)
    print(f"   First order: {first}")

    # 4. Queries
    print("4. Querying...")
    recent = KeyDescriptor.for_hash("customer_id", "c-1").with_range(
        "placed_at", "2024-03-02", operator=Operator.GREATER, order=Order.DESCENDING
    )
    print(f"   Orders after 2024-03-02 (newest first): {[o.placed_at for o in db.get_all('orders', recent, model=Purchase)]}")
    print(f"   Count: {db.count('orders', recent)}")

    large = KeyDescriptor.for_hash("customer_id", "c-1").with_secondary_index(
        "TotalIndex", "total", (50, 200), operator=Operator.BETWEEN
    )
    print(f"   Totals between 50 and 200: {[o.total for o in db.get_all('orders', large, model=Purchase)]}")

    # 5. Paging and batch reads
    print("5. Paging...")
    partition = KeyDescriptor.for_hash("customer_id", "c-1")
    page_keys = []
    while True:
        page = db.paging("orders", partition, PagedRequest(limit=2, page_keys=page_keys), model=Purchase)
        print(f"   Page: {[o.placed_at for o in page]}")
        if len(page) < 2:
            break
        page_keys = [
            PageKey(key="customer_id", value=page[-1].customer_id),
            PageKey(key="placed_at", value=page[-1].placed_at),
        ]

    keys = [
        partition.with_range("placed_at", "2024-03-01"),
        KeyDescriptor.for_hash("customer_id", "c-404").with_range("placed_at", "2024-03-01"),
    ]
    print(f"   Batch read: {db.batch_get('orders', keys, model=Purchase)}")

    # 6. Maintenance scan
    print("6. Scanning for small open orders...")
    small = db.scan(
        "orders",
        ScanFilter(expression="'total' < ?", value=50),
        ScanFilter(expression="'status' = ?", value="open"),
        model=Purchase,
    )
    print(f"   Found {len(small)} small orders")

    # Cleanup
    db.delete("orders", partition.with_range("placed_at", "2024-03-05"))
    db.delete_table("orders", wait=True)
    print("Done.")


if __name__ == "__main__":
    main()
