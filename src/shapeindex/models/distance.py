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
Distance value type used to parameterize geometric buffers.

A distance is a magnitude plus a unit. The geometry kernel works in decimal
degrees, so every distance exposes its angular equivalent along a great circle
of the mean earth sphere.
"""

import math
import re
from enum import Enum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, model_validator

from shapeindex.exceptions import ConfigurationError

EARTH_MEAN_RADIUS_KM = 6371.0087714


class DistanceUnit(str, Enum):
    MILLIMETRES = "mm"
    CENTIMETRES = "cm"
    DECIMETRES = "dm"
    METRES = "m"
    DECAMETRES = "dam"
    HECTOMETRES = "hm"
    KILOMETRES = "km"
    FEET = "ft"
    YARDS = "yd"
    INCHES = "in"
    MILES = "mi"
    NAUTICAL_MILES = "nmi"
    DEGREES = "deg"

    @property
    def metres(self) -> float:
        """Length of one unit in metres. Not defined for angular units."""
        return _METRES_PER_UNIT[self]

    @classmethod
    def from_name(cls, name: str) -> "DistanceUnit":
        """Resolves a unit symbol or long name, ignoring case."""
        unit = _UNIT_ALIASES.get(name.lower())
        if unit is None:
            raise ConfigurationError(f"Unknown distance unit '{name}'")
        return unit


_METRES_PER_UNIT: Dict[DistanceUnit, float] = {
    DistanceUnit.MILLIMETRES: 0.001,
    DistanceUnit.CENTIMETRES: 0.01,
    DistanceUnit.DECIMETRES: 0.1,
    DistanceUnit.METRES: 1.0,
    DistanceUnit.DECAMETRES: 10.0,
    DistanceUnit.HECTOMETRES: 100.0,
    DistanceUnit.KILOMETRES: 1000.0,
    DistanceUnit.FEET: 0.3048,
    DistanceUnit.YARDS: 0.9144,
    DistanceUnit.INCHES: 0.0254,
    DistanceUnit.MILES: 1609.344,
    DistanceUnit.NAUTICAL_MILES: 1852.0,
}

_UNIT_ALIASES: Dict[str, DistanceUnit] = {unit.value: unit for unit in DistanceUnit}
_UNIT_ALIASES.update({
    "millimetres": DistanceUnit.MILLIMETRES,
    "centimetres": DistanceUnit.CENTIMETRES,
    "decimetres": DistanceUnit.DECIMETRES,
    "metres": DistanceUnit.METRES,
    "decametres": DistanceUnit.DECAMETRES,
    "hectometres": DistanceUnit.HECTOMETRES,
    "kilometres": DistanceUnit.KILOMETRES,
    "feet": DistanceUnit.FEET,
    "yards": DistanceUnit.YARDS,
    "inches": DistanceUnit.INCHES,
    "miles": DistanceUnit.MILES,
    "nm": DistanceUnit.NAUTICAL_MILES,
    "degrees": DistanceUnit.DEGREES,
})

_DISTANCE_PATTERN = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)\s*([A-Za-z]*)\s*$")


class Distance(BaseModel):
    """An immutable distance, e.g. ``Distance(value=10, unit=DistanceUnit.KILOMETRES)``."""
    model_config = ConfigDict(frozen=True)

    value: float
    unit: DistanceUnit = DistanceUnit.METRES

    @model_validator(mode="before")
    @classmethod
    def _parse_text(cls, data: Any) -> Any:
        # Configuration usually carries distances as plain strings like "10km"
        if isinstance(data, str):
            parsed = cls.parse(data)
            return {"value": parsed.value, "unit": parsed.unit}
        if isinstance(data, dict) and isinstance(data.get("unit"), str):
            return {**data, "unit": DistanceUnit.from_name(data["unit"])}
        return data

    @classmethod
    def parse(cls, text: str) -> "Distance":
        """Parses strings such as ``"10km"``, ``"2.5 mi"`` or ``"300"`` (metres)."""
        match = _DISTANCE_PATTERN.match(text)
        if not match:
            raise ConfigurationError(f"Unparseable distance '{text}'")
        number, unit_name = match.groups()
        unit = DistanceUnit.from_name(unit_name) if unit_name else DistanceUnit.METRES
        return cls.model_construct(value=float(number), unit=unit)

    @property
    def degrees(self) -> float:
        """The distance expressed in decimal degrees of arc."""
        if self.unit == DistanceUnit.DEGREES:
            return self.value
        kilometres = self.value * self.unit.metres / 1000.0
        return math.degrees(kilometres / EARTH_MEAN_RADIUS_KM)

    def __str__(self) -> str:
        return f"{self.value:g}{self.unit.value}"
