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

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ShapeIndexSettings(BaseSettings):
    """
    Manages the process-wide defaults of the geo shape index.
    Settings are loaded from environment variables prefixed with SHAPEINDEX_.
    """
    # Depth of the S2 prefix tree when a mapper does not declare max_levels.
    # Level 11 cells are roughly 4.5 km wide.
    DEFAULT_MAX_LEVELS: int = Field(11, ge=1, le=30)

    # Upper bound of cells produced by a single covering. Larger values give
    # tighter coverings (fewer false positives) at the expense of more terms.
    MAX_CELLS: int = Field(64, ge=1)

    model_config = SettingsConfigDict(
        # e.g. SHAPEINDEX_DEFAULT_MAX_LEVELS=12
        env_prefix = "SHAPEINDEX_",
        case_sensitive = False
    )

# Create a single, importable instance of the settings
settings = ShapeIndexSettings()
