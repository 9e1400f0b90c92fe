#    Copyright 2025 FAO
#
#    Licensed under the Apache License, Version 2.0 (the "License");
#    you may not use this file except in compliance with the License.
#    You may obtain a copy of the License at
#
#        http://www.apache.org/licenses/LICENSE-2.0
#
#    Unless required by applicable law or agreed to in writing, software
#    distributed under the License is distributed on an "AS IS" BASIS,
#    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
#    See the License for the specific language governing permissions and
#    limitations under the License.
#
#    Author: Carlo Cancellieri (ccancellieri@gmail.com)
#    Company: FAO, Viale delle Terme di Caracalla, 00100 Rome, Italy
#    Contact: copyright@fao.org - http://fao.org/contact-us/terms/en/


"""
Mapper Base Protocol and Configuration.

A mapper binds an index field to a table column and turns the column value of
each document into index entries. This module defines the shared contract:
naming validation, supported column types, value normalization and the
per-document indexing hooks.
"""

from abc import ABC, abstractmethod
from typing import Any, FrozenSet, List, Optional

from pydantic import BaseModel, ConfigDict, Field

import shapeindex.tools.class_tools as class_tools
from shapeindex.exceptions import ConfigurationError
from shapeindex.models.entries import IndexEntry


class MapperConfig(BaseModel):
    """
    Base configuration model for mappers.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    type: str  # Discriminator field
    field: str = Field(..., description="Name of the index field")
    column: Optional[str] = Field(None, description="Name of the mapped column, the field name when omitted")
    validated: bool = Field(False, description="Validate column values on write")


class MapperProtocol(ABC):
    """
    Abstract base class for column mappers.

    Mappers are configured once at schema setup and never mutated afterwards:
    `indexable_fields` may be called concurrently for different documents.
    """

    # Column types (lowercase) this mapper can read
    supported_types: FrozenSet[str] = frozenset()

    field: str
    column: str
    validated: bool

    def __init__(self, config: MapperConfig):
        if not config.field or not config.field.strip():
            raise ConfigurationError("Field name is required")
        if config.column is not None and not config.column.strip():
            raise ConfigurationError(f"Column must not be whitespace, but found '{config.column}'")

        self.config = config
        self.field = config.field
        self.column = config.field if config.column is None else config.column
        self.validated = config.validated

    def supports(self, column_type: str) -> bool:
        """Checks if the mapper can read columns of the given type."""
        return column_type.lower() in self.supported_types

    def validate_column_type(self, column_type: str) -> None:
        """
        Raises:
            ConfigurationError: if the mapped column type is not supported.
        """
        if not self.supports(column_type):
            raise ConfigurationError(
                f"'{self.__class__.__name__}' for field '{self.field}' supports types "
                f"{sorted(self.supported_types)}, but column '{self.column}' is '{column_type}'"
            )

    @abstractmethod
    def base(self, value: Any) -> Any:
        """Normalizes a raw column value to the mapper's base type."""
        pass

    @abstractmethod
    def validate(self, value: Any) -> None:
        """Validates a column value on write when the mapper is `validated`."""
        pass

    @abstractmethod
    def indexable_fields(self, value: Any) -> List[IndexEntry]:
        """
        Returns the index entries for a single document's column value.

        Args:
            value: Raw column value, `None` when the column is unset.

        Returns:
            Entries ready to be appended to the document's index record.
        """
        pass

    @abstractmethod
    def sort_field(self, name: str, reverse: bool = False) -> Any:
        """Returns the sort specification for ordering results by this mapper's field."""
        pass

    def __repr__(self) -> str:
        return class_tools.__repr__(self, hidden_attrs=["supported_types"])
