"""
Tests for analytics module.
"""

import dataclasses
import pytest

from roitrack.geometry import Point, as_polygon
from roitrack.analytics import (
    ZoneEvent, ZoneEventType, RegionOfInterest,
    ZoneDelta, ZoneCounters, evaluate,
)


class TestEvaluate:
    """Tests for per-tick ROI evaluation."""
    
    def test_entry(self, make_track, square_polygon):
        old = [make_track(1, 'car', 50, 50, last_seen=0)]
        new = [make_track(1, 'car', 500, 500, last_seen=1000)]
        
        delta = evaluate(old, new, as_polygon(square_polygon))
        
        assert delta.entered == 1
        assert delta.exited == 0
        assert len(delta.events) == 1
        event = delta.events[0]
        assert event.track_id == 1
        assert event.event_type == ZoneEventType.ENTER
        assert event.timestamp == 1000
        assert event.position == Point(500, 500)
    
    def test_exit(self, make_track, square_polygon):
        old = [make_track(1, 'car', 500, 500)]
        new = [make_track(1, 'car', 950, 950)]
        
        delta = evaluate(old, new, as_polygon(square_polygon))
        
        assert (delta.entered, delta.exited) == (0, 1)
        assert delta.events[0].event_type == ZoneEventType.EXIT
    
    def test_no_crossing(self, make_track, square_polygon):
        old = [make_track(1, 'car', 400, 400), make_track(2, 'car', 10, 10)]
        new = [make_track(1, 'car', 500, 500), make_track(2, 'car', 20, 20)]
        
        delta = evaluate(old, new, as_polygon(square_polygon))
        
        assert delta == ZoneDelta()
    
    def test_new_track_does_not_count(self, make_track, square_polygon):
        new = [make_track(5, 'car', 500, 500)]
        
        delta = evaluate([], new, as_polygon(square_polygon))
        
        assert delta.entered == 0
    
    def test_id_matching_not_position(self, make_track, square_polygon):
        # A different id appearing inside is not an entry of the old one
        old = [make_track(1, 'car', 50, 50)]
        new = [make_track(2, 'car', 500, 500)]
        
        delta = evaluate(old, new, as_polygon(square_polygon))
        
        assert delta.entered == 0
    
    def test_degenerate_polygon(self, make_track):
        old = [make_track(1, 'car', 50, 50)]
        new = [make_track(1, 'car', 500, 500)]
        
        assert evaluate(old, new, as_polygon([(0, 0), (1000, 1000)])) == ZoneDelta()
        assert evaluate(old, new, ()) == ZoneDelta()
    
    def test_events_in_track_order(self, make_track, square_polygon):
        old = [make_track(1, 'car', 500, 500), make_track(2, 'dog', 50, 50)]
        new = [make_track(1, 'car', 950, 950), make_track(2, 'dog', 500, 500)]
        
        delta = evaluate(old, new, as_polygon(square_polygon))
        
        assert [e.track_id for e in delta.events] == [1, 2]
        assert [e.event_type for e in delta.events] == [ZoneEventType.EXIT, ZoneEventType.ENTER]


class TestRegionOfInterest:
    """Tests for RegionOfInterest."""
    
    def test_undefined_by_default(self):
        roi = RegionOfInterest()
        
        assert not roi.is_defined
        assert roi.contains(Point(500, 500)) == False
    
    def test_contains(self, square_polygon):
        roi = RegionOfInterest.from_points(square_polygon)
        
        assert roi.is_defined
        assert roi.contains(Point(500, 500)) == True
        assert roi.contains(Point(50, 500)) == False
        assert roi.to_list() == [[100, 100], [900, 100], [900, 900], [100, 900]]


class TestZoneCounters:
    """Tests for ZoneCounters."""
    
    def test_record(self):
        counters = ZoneCounters()
        
        counters.record(ZoneDelta(entered=2, exited=1))
        counters.record(ZoneDelta(entered=0, exited=3))
        
        assert counters.to_dict() == {'entered': 2, 'exited': 4}
    
    def test_copy_is_independent(self):
        counters = ZoneCounters(1, 1)
        snapshot = counters.copy()
        
        counters.record(ZoneDelta(entered=1))
        
        assert snapshot.entered == 1


class TestZoneEvent:
    """Tests for ZoneEvent."""
    
    def test_to_dict(self):
        event = ZoneEvent(3, 'car', ZoneEventType.ENTER, 2000.0, Point(500, 500))
        
        d = event.to_dict()
        
        assert d['event_type'] == 'zone_entry'
        assert d['position'] == [500, 500]
        assert ZoneEvent.from_dict(d) == event
    
    def test_frozen(self):
        event = ZoneEvent(3, 'car', ZoneEventType.EXIT, 2000.0, Point(1, 1))
        
        with pytest.raises(dataclasses.FrozenInstanceError):
            event.track_id = 4
