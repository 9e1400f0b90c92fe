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
Index entries produced for a single document.

Entries are ephemeral: the mapper builds them per indexing call and hands
them over to the caller's document-writing pipeline.
"""

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict


class EntryKind(str, Enum):
    """How the index stores an entry."""
    TERM = "term"                          # Inverted-index term (grid cell token)
    BINARY_DOC_VALUE = "binary_doc_value"  # Per-document stored bytes (exact geometry)


class IndexEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    kind: EntryKind
    value: Union[str, bytes]
