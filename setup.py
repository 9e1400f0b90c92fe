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


import os
import sys
from setuptools import setup, find_packages
import logging
from typing import Dict, List, Set

# --- Configuration ---
logging.basicConfig(level=logging.INFO, format='%(levelname)s: %(message)s', stream=sys.stdout)

# The project root is the directory containing this setup.py file.
PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))

# --- Parse Requirements ---
def parse_requirements(file_name: str, seen: Set[str] = None) -> Set[str]:
    """Reads a requirements file, following nested `-r` includes once each."""
    seen = set() if seen is None else seen
    path = os.path.join(PROJECT_ROOT, file_name)
    if path in seen:
        return set()
    seen.add(path)

    packages = set()
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            line = line.split("#", 1)[0].strip()
            if not line:
                continue
            if line.startswith("-r"):
                packages.update(parse_requirements(line[2:].strip(), seen))
            else:
                packages.add(line)
    return packages


def build_extras() -> Dict[str, List[str]]:
    """Builds the extras_require dictionary from the static requirements files."""
    extras_require: Dict[str, List[str]] = {}
    extras_require['test'] = sorted(parse_requirements('requirements-test.txt'))
    logging.info(f"Loaded static extras: {list(extras_require.keys())}")
    return extras_require


setup(
    name="shapeindex",
    version="0.1.0",
    description="Geo shape indexing with composable shape transformations and two-tier spatial strategies",
    python_requires=">=3.9",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=sorted(parse_requirements('requirements.txt')),
    extras_require=build_extras()
)
