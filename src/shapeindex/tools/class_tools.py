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


def __repr__(self, hidden_attrs=[]) -> str:
    """
    Provides a flexible string representation of the object.

    Iterates over the annotations of the class and of its bases, most generic
    first, to display attribute values. Private attributes (starting with '_')
    and those listed in `hidden_attrs` are skipped.

    Args:
        hidden_attrs: A list of public attribute names to leave out of the output.
    """
    attrs_to_show = []
    seen = set()
    for cls in reversed(type(self).__mro__):
        for attr_name in getattr(cls, "__annotations__", {}).keys():
            if attr_name in seen or attr_name.startswith('_') or attr_name in hidden_attrs:
                continue
            seen.add(attr_name)
            attr_value = getattr(self, attr_name, None)
            attrs_to_show.append(f"{attr_name}={repr(attr_value)}")

    return f"{self.__class__.__name__}({', '.join(attrs_to_show)})"
