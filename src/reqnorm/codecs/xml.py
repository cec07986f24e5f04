"""XML codec.

Decoding maps an XML document onto plain Python values:

- the root element itself is dropped, its content becomes the result
- child elements become dict keys, repeated children become lists
- attributes become ``@name`` keys
- an element with only text becomes a string; text next to attributes or
  children is kept under ``#``

Encoding is the inverse for dicts, lists and scalars.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Any

from reqnorm.exceptions import InvalidXMLError

ATTRIBUTE_PREFIX = "@"
TEXT_KEY = "#"


def _element_to_value(element: ET.Element) -> Any:
    text = (element.text or "").strip()
    children = list(element)
    if not children and not element.attrib:
        return text

    result: dict[str, Any] = {
        f"{ATTRIBUTE_PREFIX}{name}": value for name, value in element.attrib.items()
    }
    for child in children:
        value = _element_to_value(child)
        if child.tag not in result:
            result[child.tag] = value
        elif isinstance(result[child.tag], list):
            result[child.tag].append(value)
        else:
            result[child.tag] = [result[child.tag], value]
    if text:
        result[TEXT_KEY] = text
    return result


def _build_element(parent: ET.Element, value: Any) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            key = str(key)
            if key.startswith(ATTRIBUTE_PREFIX):
                parent.set(key[len(ATTRIBUTE_PREFIX) :], _to_text(item))
            elif key == TEXT_KEY:
                parent.text = _to_text(item)
            elif isinstance(item, list):
                for element in item:
                    _build_element(ET.SubElement(parent, key), element)
            else:
                _build_element(ET.SubElement(parent, key), item)
    elif isinstance(value, list):
        for item in value:
            _build_element(ET.SubElement(parent, "item"), item)
    elif value is not None:
        parent.text = _to_text(value)


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


class XMLCodec:
    """Decode and encode XML bodies."""

    def __init__(self, root_node_name: str = "response"):
        self.root_node_name = root_node_name

    def decode(self, data: bytes, format: str) -> Any:
        if not data.strip():
            return None
        try:
            root = ET.fromstring(data)
            return _element_to_value(root)
        except ET.ParseError as e:
            raise InvalidXMLError(
                f"Invalid XML: {e}", format=format, body_snippet=data, cause=e
            ) from e
        except RecursionError as e:
            raise InvalidXMLError(
                "XML document is nested too deeply",
                format=format,
                body_snippet=data,
                cause=e,
            ) from e

    def encode(self, data: Any, format: str) -> bytes:
        root = ET.Element(self.root_node_name)
        _build_element(root, data)
        return ET.tostring(root, encoding="utf-8", xml_declaration=True)
