"""In-memory record store that backs the admin panel's generic CRUD operations."""

from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Any, Mapping

_TIMESTAMPS = ("created_at", "updated_at")


class RecordNotFoundError(LookupError):
    """Raised when a model has no record with the requested id."""


class MemoryStore:
    """Holds dataclass records per model, with auto-increment ids and key/value settings.

    A model is a dataclass with an ``id`` field; its class name is the model name.
    """

    def __init__(self) -> None:
        self._types: dict[str, type] = {}
        self._records: dict[str, dict[int, Any]] = {}
        self._next_id: dict[str, int] = {}
        self._settings: dict[str, str] = {}

    def add_model(self, model_type: type) -> None:
        """Make ``model_type`` known to the store; adding it again changes nothing."""
        if not (isinstance(model_type, type) and dataclasses.is_dataclass(model_type)):
            raise TypeError(f"model type must be a dataclass, got {model_type!r}")
        if "id" not in self._init_fields(model_type):
            raise TypeError(f"model {model_type.__name__} has no id field")
        name = model_type.__name__
        if name not in self._types:
            self._types[name] = model_type
            self._records[name] = {}
            self._next_id[name] = 1

    @staticmethod
    def _init_fields(model_type: type) -> set[str]:
        return {f.name for f in dataclasses.fields(model_type) if f.init}

    def _model(self, model_name: str) -> type:
        try:
            return self._types[model_name]
        except KeyError:
            raise LookupError(f"model {model_name} not found on client") from None

    def _check_keys(self, model_name: str, model_type: type, data: Mapping[str, Any]) -> set[str]:
        names = self._init_fields(model_type)
        unknown = sorted(set(data) - names)
        if unknown:
            raise ValueError(f"{model_name.lower()}: unknown field(s) {', '.join(unknown)}")
        return names

    def query_all(self, model_name: str) -> list[Any]:
        """Return every record of the model in id order."""
        self._model(model_name)
        return list(self._records[model_name].values())

    def get(self, model_name: str, record_id: int) -> Any:
        """Return the record with ``record_id``."""
        self._model(model_name)
        try:
            return self._records[model_name][record_id]
        except KeyError:
            raise RecordNotFoundError(f"{model_name.lower()} not found") from None

    def create(self, model_name: str, data: Mapping[str, Any]) -> Any:
        """Create a record from ``data``, assigning the next id and any timestamps."""
        model_type = self._model(model_name)
        names = self._check_keys(model_name, model_type, data)
        values = {key: value for key, value in data.items() if key != "id"}
        now = datetime.now()
        for stamp in _TIMESTAMPS:
            if stamp in names and stamp not in values:
                values[stamp] = now
        record_id = self._next_id[model_name]
        try:
            record = model_type(id=record_id, **values)
        except TypeError as exc:
            raise ValueError(f"{model_name.lower()}: {exc}") from exc
        self._next_id[model_name] = record_id + 1
        self._records[model_name][record_id] = record
        return record

    def update(self, model_name: str, record_id: int, data: Mapping[str, Any]) -> Any:
        """Replace the given fields of a record and refresh ``updated_at``."""
        model_type = self._model(model_name)
        names = self._check_keys(model_name, model_type, data)
        record = self.get(model_name, record_id)
        values = {key: value for key, value in data.items() if key != "id"}
        if "updated_at" in names and "updated_at" not in values:
            values["updated_at"] = datetime.now()
        updated = dataclasses.replace(record, **values)
        self._records[model_name][record_id] = updated
        return updated

    def delete(self, model_name: str, record_id: int) -> None:
        """Remove the record with ``record_id``."""
        self.get(model_name, record_id)
        del self._records[model_name][record_id]

    def get_setting(self, key: str) -> str | None:
        """Return a stored setting, or ``None`` if it was never set."""
        return self._settings.get(key)

    def set_setting(self, key: str, value: str) -> None:
        """Create or overwrite a setting."""
        self._settings[key] = value