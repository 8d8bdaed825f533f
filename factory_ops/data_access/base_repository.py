# factory_ops/data_access/base_repository.py

import logging
from dataclasses import fields, is_dataclass, MISSING
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import (
    Any, Dict, Generic, List, Optional, Type, TypeVar, Union, TYPE_CHECKING,
    get_args, get_origin, get_type_hints,
)

from factory_ops.utils.ids import generate_id

if TYPE_CHECKING:
    from ..business_logic.entities.base_entity import BaseEntity
    from ..business_logic.factory_store import FactoryStore

logger = logging.getLogger(__name__)

T = TypeVar('T', bound='BaseEntity')

_SKIPPED_FIELDS = ("id", "extra")


def to_camel_case(name: str) -> str:
    first, *rest = name.split("_")
    return first + "".join(part[:1].upper() + part[1:] for part in rest)


def _unwrap_optional(field_type):
    if get_origin(field_type) is Union:
        possible_types = [arg for arg in get_args(field_type) if arg is not type(None)]
        if possible_types:
            return possible_types[0]
    return field_type


def _plain_number(value: Decimal):
    if value.is_finite() and value == value.to_integral_value():
        return int(value)
    return float(value)


def entity_to_document(entity) -> Dict[str, Any]:
    """Dataclass -> camelCase mapping. None values are omitted, unknown keys are written back."""
    data: Dict[str, Any] = dict(getattr(entity, "extra", None) or {})
    entity_id = getattr(entity, "id", None)
    if entity_id is not None:
        data["id"] = entity_id

    for f in fields(entity):
        if f.name in _SKIPPED_FIELDS:
            continue
        value = _value_to_document(getattr(entity, f.name))
        key = to_camel_case(f.name)
        if value is None:
            data.pop(key, None)
        else:
            data[key] = value
    return data


def _value_to_document(value):
    if value is None:
        return None
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, bool):
        return value
    if isinstance(value, Decimal):
        return _plain_number(value)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if is_dataclass(value):
        return entity_to_document(value)
    if isinstance(value, (list, tuple)):
        return [_value_to_document(item) for item in value]
    return value


def entity_from_document(model_type: Type[T], row: Dict[str, Any]) -> T:
    """camelCase mapping -> dataclass. Raises ValueError when a required field is missing."""
    if row is None:
        raise ValueError(f"Input row cannot be None for {model_type.__name__}")

    type_hints = get_type_hints(model_type)
    entity_data: Dict[str, Any] = {}
    known_keys = {"id"}

    for f in fields(model_type):
        if not f.init or f.name in _SKIPPED_FIELDS:
            continue
        key = to_camel_case(f.name)
        known_keys.add(key)
        value_from_doc = row.get(key)
        has_default = f.default is not MISSING or f.default_factory is not MISSING

        if value_from_doc is None:
            if not has_default:
                raise ValueError(
                    f"Missing value for required field '{key}' in {model_type.__name__} row: {row}"
                )
            continue

        try:
            entity_data[f.name] = _value_from_document(type_hints[f.name], value_from_doc)
        except (ValueError, TypeError, InvalidOperation) as e:
            if not has_default:
                raise ValueError(
                    f"Invalid value '{value_from_doc}' for required field '{key}' in {model_type.__name__}"
                ) from e
            logger.warning(
                f"Type conversion failed for field '{key}' with value '{value_from_doc}'. Using default. Error: {e}"
            )

    row_id = row.get("id")
    entity_data["id"] = str(row_id) if row_id is not None else None
    entity_data["extra"] = {k: v for k, v in row.items() if k not in known_keys}
    return model_type(**entity_data)


def _value_from_document(field_type, value):
    actual_type = _unwrap_optional(field_type)

    if get_origin(actual_type) in (list, List):
        item_args = get_args(actual_type)
        item_type = item_args[0] if item_args else Any
        if not isinstance(value, list):
            raise TypeError(f"Expected a list, got {type(value).__name__}")
        if is_dataclass(item_type):
            return [entity_from_document(item_type, item) for item in value if isinstance(item, dict)]
        return list(value)

    if isinstance(actual_type, type) and issubclass(actual_type, Enum):
        return actual_type(value)
    if actual_type is Decimal:
        if isinstance(value, bool):
            raise TypeError("Boolean is not a number")
        return Decimal(str(value))
    if actual_type is bool:
        return bool(value)
    if actual_type is int:
        return int(Decimal(str(value)))
    if actual_type is datetime and isinstance(value, str):
        return datetime.fromisoformat(value)
    if actual_type is date and isinstance(value, str):
        return date.fromisoformat(value[:10])
    if actual_type is str and not isinstance(value, str):
        return str(value)
    return value


class BaseRepository(Generic[T]):
    """Typed access to one list-valued collection of the factory document."""

    def __init__(self, store: 'FactoryStore', model_type: Type[T], collection_key: str):
        if store is None:
            raise ValueError("store cannot be None")
        self.store = store
        self.model_type = model_type
        self._collection_key = collection_key
        logger.debug(f"BaseRepository for {self._collection_key} initialized.")

    @property
    def collection_key(self) -> str:
        return self._collection_key

    def _rows(self) -> List[Dict[str, Any]]:
        return [row for row in self.store.get_collection(self._collection_key) if isinstance(row, dict)]

    def _entity_from_row(self, row: Dict[str, Any]) -> T:
        return entity_from_document(self.model_type, row)

    def _entity_to_row(self, entity: T) -> Dict[str, Any]:
        return entity_to_document(entity)

    def get_all(self) -> List[T]:
        entities = []
        for row in self._rows():
            try:
                entities.append(self._entity_from_row(row))
            except (ValueError, TypeError) as e:
                logger.warning(f"Skipping malformed row in {self._collection_key}: {e}")
        return entities

    def get_by_id(self, entity_id: str) -> Optional[T]:
        if entity_id is None:
            return None
        for row in self._rows():
            if str(row.get("id")) == str(entity_id):
                return self._entity_from_row(row)
        logger.debug(f"No row with id {entity_id} in {self._collection_key}.")
        return None

    def find_by_criteria(self, criteria: Dict[str, Any]) -> List[T]:
        """
        Filters entities by attribute. A criterion is either a plain value (equality)
        or an (operator, value) tuple: '=', '!=', '<', '<=', '>', '>=', 'LIKE', 'IN', 'BETWEEN'.
        """
        entities = self.get_all()
        if not criteria:
            return entities
        return [e for e in entities if all(
            self._matches(getattr(e, key, None), condition) for key, condition in criteria.items()
        )]

    @staticmethod
    def _matches(actual, condition) -> bool:
        if isinstance(condition, tuple) and len(condition) == 2:
            operator, expected = condition
            operator = str(operator).upper()
            if isinstance(actual, Enum):
                actual = actual.value
            if isinstance(expected, Enum):
                expected = expected.value
            if operator == "LIKE":
                return actual is not None and str(expected).lower() in str(actual).lower()
            if operator == "IN":
                return actual in expected
            if actual is None:
                return operator == "=" and expected is None
            if operator == "BETWEEN" and isinstance(expected, (list, tuple)) and len(expected) == 2:
                return expected[0] <= actual <= expected[1]
            comparisons = {
                "=": lambda a, b: a == b,
                "!=": lambda a, b: a != b,
                "<": lambda a, b: a < b,
                "<=": lambda a, b: a <= b,
                ">": lambda a, b: a > b,
                ">=": lambda a, b: a >= b,
            }
            if operator not in comparisons:
                raise ValueError(f"Unsupported operator '{operator}'")
            return comparisons[operator](actual, expected)
        return actual == condition

    # --- building new collection rows (no write) ---

    def rows_with(self, entity: T) -> List[Dict[str, Any]]:
        """Collection rows with the entity inserted or replaced. Assigns an id when missing."""
        if entity.id is None:
            entity.id = generate_id()
        new_row = self._entity_to_row(entity)
        rows = self.store.get_collection(self._collection_key)
        for index, row in enumerate(rows):
            if isinstance(row, dict) and str(row.get("id")) == str(entity.id):
                rows[index] = new_row
                return rows
        rows.append(new_row)
        return rows

    def rows_with_all(self, entities: List[T]) -> List[Dict[str, Any]]:
        rows = self.store.get_collection(self._collection_key)
        positions = {str(row.get("id")): i for i, row in enumerate(rows) if isinstance(row, dict)}
        for entity in entities:
            if entity.id is None:
                entity.id = generate_id()
            new_row = self._entity_to_row(entity)
            if entity.id in positions:
                rows[positions[entity.id]] = new_row
            else:
                positions[entity.id] = len(rows)
                rows.append(new_row)
        return rows

    def rows_without(self, entity_id: str) -> List[Dict[str, Any]]:
        return [
            row for row in self.store.get_collection(self._collection_key)
            if not (isinstance(row, dict) and str(row.get("id")) == str(entity_id))
        ]

    # --- single-collection writes ---

    def add(self, entity: T) -> T:
        logger.debug(f"BaseRepository.add: {type(entity).__name__} to '{self._collection_key}'.")
        if entity.id is not None and self.get_by_id(entity.id) is not None:
            raise ValueError(f"An entry with id {entity.id} already exists in {self._collection_key}.")
        self.store.replace_collection(self._collection_key, self.rows_with(entity))
        return entity

    def update(self, entity: T) -> Optional[T]:
        if entity.id is None:
            logger.error(f"Entity of type {type(entity).__name__} must have an ID to be updated.")
            return None
        if self.get_by_id(entity.id) is None:
            logger.error(f"Update failed: id {entity.id} not found in {self._collection_key}.")
            return None
        self.store.replace_collection(self._collection_key, self.rows_with(entity))
        logger.info(f"BaseRepository.update: Entity ID {entity.id} in {self._collection_key} updated.")
        return entity

    def save(self, entity: T) -> T:
        """Insert or replace."""
        self.store.replace_collection(self._collection_key, self.rows_with(entity))
        return entity

    def delete(self, entity_id: str) -> bool:
        rows = self.store.get_collection(self._collection_key)
        remaining = self.rows_without(entity_id)
        if len(remaining) == len(rows):
            logger.warning(f"Delete: id {entity_id} not found in {self._collection_key}.")
            return False
        self.store.replace_collection(self._collection_key, remaining)
        logger.info(f"Deleted id {entity_id} from {self._collection_key}.")
        return True
