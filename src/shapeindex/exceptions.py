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
This module defines the hierarchy of custom exceptions raised while
configuring a geo shape index and while indexing documents, allowing the
schema setup and the indexing pipeline to "fail fast" with a meaningful
message.
"""

from typing import Optional


class ShapeIndexError(Exception):
    """Base class for all custom shape indexing exceptions."""
    def __init__(self, message, original_exception=None):
        super().__init__(message)
        self.original_exception = original_exception
        self.details = str(original_exception) if original_exception else "No additional details."

    def __str__(self):
        if self.original_exception is None:
            return super().__str__()
        return f"{super().__str__()} (Details: {self.details})"


class ConfigurationError(ShapeIndexError, ValueError):
    """Raised when a mapper or shape configuration is invalid (fatal at schema setup)."""
    pass


class GeometryError(ShapeIndexError):
    """Base class for per-document geometry failures."""
    pass


class GeometryParseError(GeometryError):
    """Raised when a WKT string cannot be parsed."""
    def __init__(self, text, original_exception=None):
        super().__init__(f"Unparseable WKT shape '{text}'", original_exception)
        self.text = text


class GeometryOperationError(GeometryError):
    """Raised when the geometry kernel rejects an operation (e.g. an invalid polygon)."""
    def __init__(self, operation: str, original_exception=None):
        super().__init__(f"Geometry operation '{operation}' failed", original_exception)
        self.operation = operation


class UnsupportedOperationError(ShapeIndexError):
    """Raised for operations a mapper declares as unsupported, such as sorting by a spatial field."""
    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field
