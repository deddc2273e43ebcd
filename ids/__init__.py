from ids.random_ids import (
    add_uuid_hyphens,
    generate_numeric_id,
    generate_random_uuid,
    generate_short_id,
    is_valid_uuid,
    remove_uuid_hyphens,
)
from ids.ulid import (
    compare_sortable_ids_by_time,
    extract_sortable_id_timestamp,
    generate_sortable_id,
    is_valid_sortable_id,
)
from ids.uuid7 import extract_uuid_timestamp, generate_time_ordered_uuid

__all__ = [
    "generate_time_ordered_uuid",
    "extract_uuid_timestamp",
    "generate_sortable_id",
    "is_valid_sortable_id",
    "extract_sortable_id_timestamp",
    "compare_sortable_ids_by_time",
    "generate_random_uuid",
    "generate_short_id",
    "generate_numeric_id",
    "remove_uuid_hyphens",
    "add_uuid_hyphens",
    "is_valid_uuid",
]
