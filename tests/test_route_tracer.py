"""
Route tracing tests for IsoRoute
Unit tests for waypoints, path segments, distance-indexed paths and RouteTracer
"""

import numpy as np
import pytest
from unittest.mock import Mock

from isoroute.domain.models import Path, PathSegment, SegmentDirection, Waypoint
from isoroute.domain.services import RouteTracer, TraceState
from isoroute.shared.exceptions import (
    InvalidRouteError, PrematureQueryError, TracingError, ValidationError
)


class TestWaypoint:
    """Test Waypoint value object"""

    def test_from_value(self):
        """Test building waypoints from triples"""
        point = Waypoint.from_value([1, 2, 3])
        assert point == Waypoint(1.0, 2.0, 3.0)
        assert Waypoint.from_value(point) is point

    def test_distance(self):
        """Test Euclidean distance in 3D"""
        assert Waypoint(0, 0, 0).distance_to(Waypoint(2, 3, 6)) == pytest.approx(7.0)

    def test_lerp(self):
        """Test linear interpolation between points"""
        a = Waypoint(0.0, 10.0, 0.0)
        b = Waypoint(10.0, 10.0, -20.0)
        assert a.lerp(b, 0.0) == a
        assert a.lerp(b, 1.0) == b
        assert a.lerp(b, 0.25).as_tuple() == pytest.approx((2.5, 10.0, -5.0))


class TestPathSegment:
    """Test PathSegment value object"""

    def test_length(self):
        segment = PathSegment(Waypoint(0, 0, 0), Waypoint(3, 0, 4))
        assert segment.length == pytest.approx(5.0)

    def test_point_at_is_clamped(self):
        """Test fractions outside [0, 1] stay on the segment"""
        segment = PathSegment(Waypoint(0, 0, 0), Waypoint(10, 0, 0))
        assert segment.point_at(-1.0) == Waypoint(0, 0, 0)
        assert segment.point_at(2.0) == Waypoint(10, 0, 0)
        assert segment.point_at(0.5) == Waypoint(5, 0, 0)

    def test_zero_length_segment(self):
        """Test a degenerate segment always yields its start"""
        point = Waypoint(4, 5, 6)
        segment = PathSegment(point, point)
        assert segment.length == 0
        assert segment.point_at(0.5) == point

    @pytest.mark.parametrize("end, expected", [
        ((0, 0, 50), SegmentDirection.UP),
        ((0, 0, -50), SegmentDirection.DOWN),
        ((50, 0, 0), SegmentDirection.LEFT),
        ((-50, 0, 0), SegmentDirection.RIGHT),
        ((50, 0, 50), SegmentDirection.UP),       # Diagonal resolves on z first
        ((-50, 0, -50), SegmentDirection.DOWN),
        ((0, 10, 0), SegmentDirection.NONE),      # Vertical only
    ])
    def test_direction(self, end, expected):
        """Test facing derived from the segment's floor-plane movement"""
        segment = PathSegment(Waypoint(0, 0, 0), Waypoint(*end))
        assert segment.direction == expected


class TestPath:
    """Test distance-indexed Path"""

    def setup_method(self):
        """Set up an L-shaped path: 10 units along x, then 20 along z"""
        self.path = Path([(0, 0, 0), (10, 0, 0), (10, 0, 20)])

    def test_requires_two_waypoints(self):
        """Test construction fails with fewer than two waypoints"""
        with pytest.raises(InvalidRouteError) as exc_info:
            Path([(0, 0, 0)])
        assert exc_info.value.waypoint_count == 1
        assert exc_info.value.error_code == "INVALID_ROUTE"
        assert isinstance(exc_info.value, TracingError)

        with pytest.raises(InvalidRouteError):
            Path([])

    def test_structure(self):
        """Test segments, endpoints and start distances"""
        assert len(self.path) == 2
        assert self.path.start == Waypoint(0, 0, 0)
        assert self.path.end == Waypoint(10, 0, 20)
        assert self.path.total_length == pytest.approx(30.0)
        np.testing.assert_allclose(self.path.start_distances, [0.0, 10.0])

    def test_start_distances_are_read_only(self):
        """Test callers cannot corrupt the segment index"""
        distances = self.path.start_distances
        distances[1] = 99.0
        assert self.path.segment_index_at(12.0) == 1

    @pytest.mark.parametrize("waypoints", [
        [(0, 0, 0), (1, 1, 1)],
        [(0, 0, 0), (3, 4, 0), (3, 4, 12), (-7, 4, 12)],
        [(5, 5, 5), (5, 5, 5), (6, 5, 5)],
        [(0.5, 0.25, 0.0), (100.0, 27.5, 50.0), (150.0, 27.5, 100.0), (150.0, 27.5, 150.0)],
    ])
    def test_total_equals_sum_of_segments(self, waypoints):
        """Test total length is the sum of the segment lengths"""
        path = Path(waypoints)
        assert path.total_length == pytest.approx(sum(s.length for s in path.segments))

    @pytest.mark.parametrize("distance, expected", [
        (-5.0, 0),
        (0.0, 0),
        (9.999, 0),
        (10.0, 1),    # Shared boundary belongs to the later segment
        (25.0, 1),
        (30.0, 1),
        (1000.0, 1),
    ])
    def test_segment_index_at(self, distance, expected):
        assert self.path.segment_index_at(distance) == expected

    @pytest.mark.parametrize("distance, expected", [
        (0.0, (0, 0, 0)),
        (5.0, (5, 0, 0)),
        (10.0, (10, 0, 0)),
        (15.0, (10, 0, 5)),
        (30.0, (10, 0, 20)),
        (45.0, (10, 0, 20)),
        (-3.0, (0, 0, 0)),
    ])
    def test_position_at(self, distance, expected):
        """Test interpolation along the path, pinned at both ends"""
        assert self.path.position_at(distance).as_tuple() == pytest.approx(expected)

    def test_zero_length_segments_are_skipped(self):
        """Test repeated waypoints never cause a division by zero"""
        path = Path([(0, 0, 0), (0, 0, 0), (5, 0, 0), (5, 0, 0), (5, 0, 5)])
        assert path.total_length == pytest.approx(10.0)
        assert path.segment_index_at(0.0) == 1
        assert path.segment_index_at(5.0) == 3
        assert path.position_at(2.5).as_tuple() == pytest.approx((2.5, 0, 0))
        assert path.position_at(5.0).as_tuple() == pytest.approx((5, 0, 0))
        assert path.position_at(7.5).as_tuple() == pytest.approx((5, 0, 2.5))

    def test_progress(self):
        assert self.path.progress_at(0.0) == 0.0
        assert self.path.progress_at(15.0) == pytest.approx(0.5)
        assert self.path.progress_at(60.0) == 1.0

    def test_zero_total_length(self):
        """Test a path that does not move anywhere"""
        path = Path([(1, 2, 3), (1, 2, 3)])
        assert path.total_length == 0
        assert path.progress_at(0.0) == 1.0
        assert path.position_at(0.0) == Waypoint(1, 2, 3)
        assert path.segment_at(0.0).direction == SegmentDirection.NONE


class TestRouteTracer:
    """Test constant velocity route tracing"""

    def setup_method(self):
        """Set up a tracer at 30 units per second"""
        self.tracer = RouteTracer(velocity=30.0)

    def test_invalid_velocity(self):
        """Test non-positive velocities are rejected"""
        with pytest.raises(ValidationError):
            RouteTracer(velocity=0)
        with pytest.raises(ValidationError):
            RouteTracer(velocity=-1.0)
        with pytest.raises(ValidationError):
            RouteTracer(velocity="fast")

    def test_from_settings(self):
        tracer = RouteTracer.from_settings(Mock(velocity=12.5))
        assert tracer.velocity == 12.5

    def test_idle_before_route(self):
        """Test queries before any route has been set"""
        assert self.tracer.state == TraceState.IDLE
        assert self.tracer.is_playing() is False
        assert self.tracer.path is None

        with pytest.raises(PrematureQueryError) as exc_info:
            self.tracer.get_position()
        assert exc_info.value.error_code == "PREMATURE_QUERY"

        with pytest.raises(PrematureQueryError):
            self.tracer.get_position_and_direction()
        with pytest.raises(PrematureQueryError):
            _ = self.tracer.total_distance
        with pytest.raises(PrematureQueryError):
            _ = self.tracer.progress

    def test_straight_route_example(self):
        """Test a 100 unit route from start to finish"""
        self.tracer.set_route([[0, 0, 0], [100, 0, 0]])

        assert self.tracer.get_position() == Waypoint(0, 0, 0)
        assert self.tracer.is_playing()
        assert self.tracer.state == TraceState.PLAYING

        for _ in range(3):
            self.tracer.update(1.0)
        assert self.tracer.is_playing()
        assert self.tracer.get_position().as_tuple() == pytest.approx((90, 0, 0))

        self.tracer.update(1.0)  # 120 units travelled
        assert not self.tracer.is_playing()
        assert self.tracer.state == TraceState.FINISHED
        assert self.tracer.get_position() == Waypoint(100, 0, 0)
        assert self.tracer.progress == 1.0

    def test_finished_stays_finished(self):
        """Test further ticks keep the entity on the last waypoint"""
        self.tracer.set_route([(0, 0, 0), (30, 0, 0)])
        self.tracer.update(1.0)
        assert self.tracer.state == TraceState.FINISHED

        self.tracer.update(10.0)
        assert self.tracer.state == TraceState.FINISHED
        assert self.tracer.get_position() == Waypoint(30, 0, 0)

    def test_positions_along_corner(self):
        """Test sampling across a segment boundary"""
        self.tracer.set_route([(0, 0, 0), (30, 0, 0), (30, 0, 60)])

        self.tracer.update(0.5)
        position, direction = self.tracer.get_position_and_direction()
        assert position.as_tuple() == pytest.approx((15, 0, 0))
        assert direction == SegmentDirection.LEFT

        self.tracer.update(1.0)
        position, direction = self.tracer.get_position_and_direction()
        assert position.as_tuple() == pytest.approx((30, 0, 15))
        assert direction == SegmentDirection.UP
        assert self.tracer.progress == pytest.approx(0.5)
        assert self.tracer.travelled_distance == pytest.approx(45.0)

    def test_reset_restarts_route(self):
        """Test reset returns to the first waypoint without dropping the route"""
        self.tracer.set_route([(0, 0, 0), (60, 0, 0)])
        self.tracer.update(5.0)
        assert self.tracer.state == TraceState.FINISHED

        self.tracer.reset()
        assert self.tracer.elapsed_seconds == 0.0
        assert self.tracer.get_position() == Waypoint(0, 0, 0)
        assert self.tracer.is_playing()
        assert self.tracer.total_distance == pytest.approx(60.0)

    def test_set_route_restarts_clock(self):
        """Test a new route is traced from its beginning"""
        self.tracer.set_route([(0, 0, 0), (60, 0, 0)])
        self.tracer.update(1.0)

        self.tracer.set_route([(0, 0, 0), (0, 0, 90)])
        assert self.tracer.elapsed_seconds == 0.0
        assert self.tracer.get_position() == Waypoint(0, 0, 0)
        assert self.tracer.total_distance == pytest.approx(90.0)

    def test_invalid_route_keeps_previous(self):
        """Test a rejected route leaves the current one in place"""
        self.tracer.set_route([(0, 0, 0), (60, 0, 0)])
        self.tracer.update(1.0)

        with pytest.raises(InvalidRouteError):
            self.tracer.set_route([(5, 5, 5)])

        assert self.tracer.total_distance == pytest.approx(60.0)
        assert self.tracer.get_position().as_tuple() == pytest.approx((30, 0, 0))

    def test_negative_delta_rejected(self):
        """Test elapsed time only moves forward"""
        self.tracer.set_route([(0, 0, 0), (60, 0, 0)])
        with pytest.raises(ValidationError):
            self.tracer.update(-0.1)
        assert self.tracer.elapsed_seconds == 0.0

    @pytest.mark.parametrize("delta", [float("nan"), float("inf")])
    def test_non_finite_delta_rejected(self, delta):
        """Test a bad tick cannot stall or skip the route"""
        self.tracer.set_route([(0, 0, 0), (100, 0, 0)])
        with pytest.raises(ValidationError):
            self.tracer.update(delta)
        assert self.tracer.elapsed_seconds == 0.0

        self.tracer.update(1000.0)
        assert self.tracer.state == TraceState.FINISHED
        assert self.tracer.get_position() == Waypoint(100, 0, 0)

    @pytest.mark.parametrize("velocity", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_velocity_rejected(self, velocity):
        with pytest.raises(ValidationError) as exc_info:
            RouteTracer(velocity=velocity)
        assert exc_info.value.field == "velocity"

    def test_zero_length_route_finishes_immediately(self):
        """Test a route whose waypoints coincide"""
        self.tracer.set_route([(7, 0, 7), (7, 0, 7)])
        assert self.tracer.state == TraceState.FINISHED
        assert not self.tracer.is_playing()
        assert self.tracer.progress == 1.0
        assert self.tracer.get_position() == Waypoint(7, 0, 7)

    def test_update_before_route(self):
        """Test ticking an idle tracer only advances the clock"""
        self.tracer.update(0.25)
        assert self.tracer.elapsed_seconds == 0.25
        assert self.tracer.state == TraceState.IDLE

    def test_many_small_ticks(self):
        """Test accumulated frame ticks reach the end of the route"""
        self.tracer.set_route([(0, 0, 0), (50, 0, 0), (50, 0, 50)])
        ticks = 0
        while self.tracer.is_playing():
            self.tracer.update(1.0 / 60.0)
            ticks += 1

        assert 199 <= ticks <= 201  # 100 units at 30 units/s, 60 ticks per second
        assert self.tracer.get_position() == Waypoint(50, 0, 50)
