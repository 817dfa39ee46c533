"""
Tests for the CRS registry.
"""

import threading
import time
from typing import Any, List, Optional

import pytest
from pyproj import CRS

from ogutils.core.crs import registry as registry_module
from ogutils.core.crs.provider import CoordinateTransform, CrsProvider, CrsDefinition
from ogutils.core.crs.registry import (
    CrsRegistry,
    get_default_registry,
    reset_default_registry,
    synthesize_zone_definition,
)
from ogutils.core.errors import TransformConstructionError, UnsupportedCrsError
from ogutils.models.crs import CGCS2000_GEOGRAPHIC, ProjectedDefinition, ZoneWidth


class CountingProvider(CrsProvider):
    """Provider returning a fresh opaque handle per call."""

    def __init__(self, delay: float = 0.0):
        self.delay = delay
        self.calls: List[int] = []
        self._lock = threading.Lock()

    def create_crs(self, definition: CrsDefinition) -> Any:
        with self._lock:
            self.calls.append(definition.wkid)
        if self.delay:
            time.sleep(self.delay)
        return object()

    def create_transform(
        self,
        source: Any,
        target: Any,
        source_wkid: Optional[int] = None,
        target_wkid: Optional[int] = None,
    ) -> CoordinateTransform:
        raise NotImplementedError


class RejectingProvider(CountingProvider):
    """Provider whose engine rejects every definition."""

    def create_crs(self, definition: CrsDefinition) -> Any:
        raise TransformConstructionError(f"Rejected WKID {definition.wkid}")


class TestZoneDefinition:
    """Tests for synthesize_zone_definition."""

    def test_three_degree_zone_39(self) -> None:
        """Test the synthesized parameters of 3-degree zone 39."""
        definition = synthesize_zone_definition(4527)

        assert isinstance(definition, ProjectedDefinition)
        assert definition.wkid == 4527
        assert definition.zone == 39
        assert definition.zone_width is ZoneWidth.THREE_DEGREE
        assert definition.central_meridian == 117.0
        assert definition.false_easting == 39_500_000.0
        assert definition.false_northing == 0.0
        assert definition.latitude_of_origin == 0.0
        assert definition.scale_factor == 1.0
        assert definition.projection == "Transverse_Mercator"
        assert definition.geographic is CGCS2000_GEOGRAPHIC
        assert definition.name == "CGCS2000 / 3-degree Gauss-Kruger zone 39"

    def test_six_degree_zone_20(self) -> None:
        """Test the synthesized parameters of 6-degree zone 20."""
        definition = synthesize_zone_definition(4498)

        assert definition.zone == 20
        assert definition.zone_width is ZoneWidth.SIX_DEGREE
        assert definition.central_meridian == 117.0
        assert definition.false_easting == 20_500_000.0
        assert definition.name == "CGCS2000 / Gauss-Kruger zone 20"

    def test_wkt_rendering(self) -> None:
        """Test the WKT carries every projection parameter."""
        wkt = synthesize_zone_definition(4527).to_wkt()

        assert wkt.startswith('PROJCS["CGCS2000 / 3-degree Gauss-Kruger zone 39"')
        assert 'PROJECTION["Transverse_Mercator"]' in wkt
        assert 'PARAMETER["central_meridian",117]' in wkt
        assert 'PARAMETER["false_easting",39500000]' in wkt
        assert 'SPHEROID["CGCS2000",6378137,298.257222101]' in wkt

    def test_unknown_wkid(self) -> None:
        """Test non-zone WKIDs cannot be synthesized."""
        with pytest.raises(UnsupportedCrsError):
            synthesize_zone_definition(9999)


class TestCrsRegistry:
    """Tests for CrsRegistry with the pyproj provider."""

    def test_geographic_cgcs2000(self) -> None:
        """Test 4490 materializes as a geographic CRS on CGCS2000."""
        crs = CrsRegistry().get(4490)

        assert isinstance(crs, CRS)
        assert crs.is_geographic
        assert crs.ellipsoid.semi_major_metre == pytest.approx(6378137.0)
        assert crs.ellipsoid.inverse_flattening == pytest.approx(298.257222101)

    def test_geographic_wgs84(self) -> None:
        """Test 4326 is available as a geographic CRS."""
        crs = CrsRegistry().get(4326)

        assert crs.is_geographic
        assert crs.ellipsoid.inverse_flattening == pytest.approx(298.257223563)

    def test_projected_zone(self) -> None:
        """Test a zone WKID materializes as a projected CRS."""
        crs = CrsRegistry().get(4527)

        assert crs.is_projected
        values = [param.value for param in crs.coordinate_operation.params]
        assert 117.0 in values
        assert 39_500_000.0 in values

    def test_unknown_wkid(self) -> None:
        """Test unknown WKIDs raise and are not cached."""
        registry = CrsRegistry()

        with pytest.raises(UnsupportedCrsError) as exc_info:
            registry.get(9999)

        assert exc_info.value.wkid == 9999
        assert 9999 not in registry
        assert len(registry) == 0

    def test_handles_cached(self) -> None:
        """Test a WKID is built once and the same handle is returned."""
        provider = CountingProvider()
        registry = CrsRegistry(provider=provider)

        first = registry.get(4527)
        second = registry.get(4527)

        assert first is second
        assert provider.calls == [4527]
        assert 4527 in registry
        assert registry.cached_wkids() == [4527]

    def test_materialization_failure(self) -> None:
        """Test engine rejection surfaces as UnsupportedCrsError."""
        registry = CrsRegistry(provider=RejectingProvider())

        with pytest.raises(UnsupportedCrsError, match="could not be materialized") as exc_info:
            registry.get(4527)

        assert isinstance(exc_info.value.__cause__, TransformConstructionError)
        assert len(registry) == 0

    def test_supported_wkids(self) -> None:
        """Test supported WKID listing."""
        registry = CrsRegistry(provider=CountingProvider())
        supported = registry.supported_wkids()

        assert supported[:2] == [4326, 4490]
        assert 4491 in supported
        assert 4533 in supported
        assert len(supported) == 2 + 11 + 22
        assert registry.is_supported(4527)
        assert not registry.is_supported(4269)

    def test_definition_for_does_not_materialize(self) -> None:
        """Test definitions can be inspected without building handles."""
        provider = CountingProvider()
        registry = CrsRegistry(provider=provider)

        assert registry.definition_for(4490) is CGCS2000_GEOGRAPHIC
        assert registry.definition_for(4527).zone == 39
        assert provider.calls == []

    def test_clear(self) -> None:
        """Test clearing drops cached handles."""
        registry = CrsRegistry(provider=CountingProvider())
        registry.get(4490)
        registry.clear()

        assert len(registry) == 0


class TestRegistryConcurrency:
    """Tests for concurrent registry access."""

    def test_single_handle_under_contention(self) -> None:
        """Test racing threads all receive the one published handle."""
        registry = CrsRegistry(provider=CountingProvider(delay=0.01))
        barrier = threading.Barrier(8)
        results: List[Any] = []
        results_lock = threading.Lock()

        def worker() -> None:
            barrier.wait()
            handle = registry.get(4527)
            with results_lock:
                results.append(handle)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(results) == 8
        assert all(handle is results[0] for handle in results)
        assert len(registry) == 1


class TestDefaultRegistry:
    """Tests for the shared registry."""

    def test_default_registry_is_shared(self) -> None:
        """Test the shared registry is created once."""
        reset_default_registry()
        try:
            assert get_default_registry() is get_default_registry()
        finally:
            reset_default_registry()

    def test_reset(self) -> None:
        """Test reset discards the shared registry."""
        first = get_default_registry()
        reset_default_registry()

        assert registry_module._default_registry is None
        assert get_default_registry() is not first
        reset_default_registry()
