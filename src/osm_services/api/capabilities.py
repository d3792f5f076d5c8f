"""
Parsing of the OSM ``/api/capabilities`` document.

The document advertises the API version range a server accepts along with
its request limits, e.g.::

    <osm version="0.6" generator="OpenStreetMap server">
      <api>
        <version minimum="0.6" maximum="0.6"/>
        <area maximum="0.25"/>
        <tracepoints per_page="5000"/>
        <waynodes maximum="2000"/>
        <changesets maximum_elements="10000"/>
        <timeout seconds="300"/>
      </api>
    </osm>
"""

import xml.etree.ElementTree as ET
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Optional, Union

from osm_services.errors import CapabilityParseError


@dataclass(frozen=True)
class Capabilities:
    """Limits advertised by a server. Fields absent from the document are None."""

    min_version: Optional[float] = None
    max_version: Optional[float] = None
    timeout: Optional[int] = None
    max_changeset_elements: Optional[int] = None
    max_way_nodes: Optional[int] = None
    tracepoints_per_page: Optional[int] = None
    max_area: Optional[float] = None

    def supports(self, api_version: Union[str, float]) -> bool:
        """Whether ``api_version`` lies inside the advertised version range."""
        if self.min_version is None or self.max_version is None:
            return False
        try:
            version = float(api_version)
        except (TypeError, ValueError):
            return False
        return self.min_version <= version <= self.max_version

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# field name -> (tag, attribute, type)
CAPABILITY_FIELDS = {
    "min_version": ("version", "minimum", float),
    "max_version": ("version", "maximum", float),
    "timeout": ("timeout", "seconds", int),
    "max_changeset_elements": ("changesets", "maximum_elements", int),
    "max_way_nodes": ("waynodes", "maximum", int),
    "tracepoints_per_page": ("tracepoints", "per_page", int),
    "max_area": ("area", "maximum", float),
}


def get_xml_value(root: ET.Element, tag: str, attribute: str, default: Any = None) -> Any:
    """
    Return ``attribute`` of the first ``tag`` element anywhere in the document.

    The root element itself is included in the search. ``default`` is
    returned when no such element exists or it lacks the attribute.
    """
    element = next(root.iter(tag), None)
    if element is None:
        return default
    return element.get(attribute, default)


def _convert(value: Any, cast: Callable[[str], Any], tag: str, attribute: str) -> Any:
    if not isinstance(value, str):
        return value
    try:
        if cast is int:
            # "300.0" is accepted for integer limits
            return int(float(value))
        return cast(value)
    except (ValueError, OverflowError):
        raise CapabilityParseError(
            f"Invalid value for {tag}/@{attribute}", reason=repr(value)
        ) from None


def parse_capabilities(body: Union[str, bytes], default: Any = None) -> Capabilities:
    """
    Parse a capabilities document.

    Args:
        body: The XML document
        default: Value for fields the document does not advertise

    Raises:
        CapabilityParseError: If the document is not well-formed XML or an
            advertised value is not numeric
    """
    try:
        root = ET.fromstring(body)
    except (ET.ParseError, TypeError) as e:
        raise CapabilityParseError(
            "Problem checking server capabilities", reason=str(e)
        ) from e

    values = {}
    for field, (tag, attribute, cast) in CAPABILITY_FIELDS.items():
        raw = get_xml_value(root, tag, attribute, default)
        values[field] = _convert(raw, cast, tag, attribute)
    return Capabilities(**values)
