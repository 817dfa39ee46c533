"""
Pydantic models for layers, fields and features.

A layer is an in-memory feature collection: field definitions, features
carrying WKT geometry plus attributes, the WKID of the coordinates and a
tolerance expressed in the units of that WKID.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from pydantic import BaseModel, Field

from ogutils.core.crs import zones
from ogutils.core.errors import ValidationError


class GeometryType(str, Enum):
    """Geometry type of the features in a layer."""

    POINT = "POINT"
    LINESTRING = "LINESTRING"
    POLYGON = "POLYGON"
    MULTIPOINT = "MULTIPOINT"
    MULTILINESTRING = "MULTILINESTRING"
    MULTIPOLYGON = "MULTIPOLYGON"
    GEOMETRYCOLLECTION = "GEOMETRYCOLLECTION"
    UNKNOWN = "UNKNOWN"


class FieldDataType(str, Enum):
    """Attribute field data types."""

    STRING = "STRING"
    INTEGER = "INTEGER"
    LONG = "LONG"
    DOUBLE = "DOUBLE"
    FLOAT = "FLOAT"
    BOOLEAN = "BOOLEAN"
    DATE = "DATE"
    DATETIME = "DATETIME"
    BINARY = "BINARY"
    UNKNOWN = "UNKNOWN"


class OguField(BaseModel):
    """Attribute field definition."""

    name: str = Field(..., description="Field name")
    alias: Optional[str] = Field(None, description="Display alias")
    data_type: FieldDataType = Field(FieldDataType.STRING, description="Data type")
    length: Optional[int] = Field(None, ge=0, description="Length for string fields")
    precision: Optional[int] = Field(None, ge=0, description="Precision for numeric fields")
    scale: Optional[int] = Field(None, ge=0, description="Decimal places for numeric fields")
    is_nullable: bool = Field(True, description="Whether the field accepts null values")
    default_value: Optional[Any] = Field(None, description="Default value")


class OguFeature(BaseModel):
    """A single feature: geometry as WKT plus attribute values."""

    fid: int = Field(..., description="Feature identifier")
    wkt: Optional[str] = Field(None, description="Geometry in WKT, absent for no geometry")
    attributes: Dict[str, Any] = Field(default_factory=dict, description="Attribute values")

    def get_value(self, field_name: str) -> Any:
        """Get an attribute value, or None when the attribute is not set."""
        return self.attributes.get(field_name)

    def set_value(self, field_name: str, value: Any) -> None:
        self.attributes[field_name] = value

    def has_attribute(self, field_name: str) -> bool:
        return field_name in self.attributes

    @property
    def has_geometry(self) -> bool:
        return self.wkt is not None and bool(self.wkt.strip())


class OguLayerMetadata(BaseModel):
    """Descriptive metadata carried alongside a layer."""

    data_source: Optional[str] = Field(None, description="Where the data came from")
    coordinate_system_name: Optional[str] = Field(None, description="Name of the CRS")
    zone_division: Optional[str] = Field(
        None, description="Zone division, e.g. '3' or '6' degrees"
    )
    projection_type: Optional[str] = Field(None, description="Projection family")
    measure_unit: Optional[str] = Field(None, description="Coordinate unit")
    extended_properties: Dict[str, Any] = Field(
        default_factory=dict, description="Free-form extra properties"
    )
    create_time: Optional[datetime] = Field(None, description="Creation timestamp")
    modify_time: Optional[datetime] = Field(None, description="Last modification timestamp")


class OguLayer(BaseModel):
    """
    Feature collection with a coordinate system tag.

    ``wkid`` and ``geometry_type`` are optional at construction so that a
    layer can be assembled incrementally; ``validate_layer`` enforces them
    before the layer is processed.
    """

    name: str = Field("", description="Layer name")
    alias: Optional[str] = Field(None, description="Display alias")
    wkid: Optional[int] = Field(None, description="WKID of the feature coordinates")
    geometry_type: Optional[GeometryType] = Field(None, description="Geometry type")
    tolerance: Optional[float] = Field(
        None, gt=0, description="Coordinate tolerance in units of the WKID"
    )
    fields: List[OguField] = Field(default_factory=list, description="Field definitions")
    features: List[OguFeature] = Field(default_factory=list, description="Features")
    metadata: Optional[OguLayerMetadata] = Field(None, description="Layer metadata")

    def validate_layer(self) -> None:
        """
        Check that the layer is complete enough to be processed.

        Fills in ``tolerance`` from the WKID when it is absent.

        Raises:
            ValidationError: If name, geometry type or WKID is missing, field
                names repeat, or a feature has an undeclared attribute
        """
        if not self.name or not self.name.strip():
            raise ValidationError("Layer name cannot be null or empty", field="name")

        if self.geometry_type is None:
            raise ValidationError(
                f"Layer '{self.name}' has no geometry type", field="geometry_type"
            )

        if self.wkid is None:
            raise ValidationError(f"Layer '{self.name}' has no WKID", field="wkid")

        names = [field.name for field in self.fields]
        if len(set(names)) != len(names):
            duplicates = sorted({name for name in names if names.count(name) > 1})
            raise ValidationError(
                "Field names must be unique",
                field="fields",
                details={"duplicates": duplicates},
            )

        declared = set(names)
        for feature in self.features:
            for attribute in feature.attributes:
                if attribute not in declared:
                    raise ValidationError(
                        f"Feature {feature.fid} contains attribute '{attribute}' "
                        f"that is not defined in fields",
                        field="features",
                        details={"fid": feature.fid, "attribute": attribute},
                    )

        if self.tolerance is None:
            self.tolerance = zones.tolerance(self.wkid)

    def filter(self, predicate: Callable[[OguFeature], bool]) -> List[OguFeature]:
        """Get the features matching ``predicate``."""
        return [feature for feature in self.features if predicate(feature)]

    def feature_count(self) -> int:
        return len(self.features)

    def field_count(self) -> int:
        return len(self.fields)

    def get_field(self, field_name: str) -> Optional[OguField]:
        """Look up a field definition by name, ignoring case."""
        wanted = field_name.lower()
        for field in self.fields:
            if field.name.lower() == wanted:
                return field
        return None

    def add_field(self, field: OguField) -> None:
        """
        Append a field definition.

        Raises:
            ValidationError: If a field with the same name already exists
        """
        if any(existing.name == field.name for existing in self.fields):
            raise ValidationError(f"Field '{field.name}' already exists", field="fields")
        self.fields.append(field)

    def add_feature(self, feature: OguFeature) -> None:
        self.features.append(feature)

    def remove_feature(self, fid: int) -> bool:
        """
        Remove the first feature with the given fid.

        Returns:
            True if a feature was removed
        """
        for index, feature in enumerate(self.features):
            if feature.fid == fid:
                del self.features[index]
                return True
        return False

    def clone(self) -> "OguLayer":
        """Deep copy of the layer; nothing is shared with the original."""
        return self.model_copy(deep=True)

    def to_json(self, indent: Optional[int] = 2) -> str:
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, json_data: str) -> "OguLayer":
        return cls.model_validate_json(json_data)
