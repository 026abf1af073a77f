#!/usr/bin/python3

# Copyright (C) 2007 Google Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""In-memory records of a decoded GTFS-realtime feed and of the static
schedule rows it is checked against.

Every optional field that is absent from the feed is None. Values are never
replaced by a default, e.g. a missing stop_sequence is None and not 0.

  FeedSnapshot: the trip updates of one feed message
  TripUpdate: progress of one trip
  StopTimeUpdate: real-time information about one stop of a trip
  StopTimeEvent: an arrival or a departure
  StaticStopEntry: one (stop_sequence, stop_id) row of stop_times.txt
"""

# TripDescriptor.schedule_relationship values
TRIP_SCHEDULED = "SCHEDULED"
TRIP_ADDED = "ADDED"
TRIP_UNSCHEDULED = "UNSCHEDULED"
TRIP_CANCELED = "CANCELED"
TRIP_DUPLICATED = "DUPLICATED"
TRIP_DELETED = "DELETED"

# StopTimeUpdate.schedule_relationship values
SCHEDULED = "SCHEDULED"
SKIPPED = "SKIPPED"
NO_DATA = "NO_DATA"
UNSCHEDULED = "UNSCHEDULED"


class StopTimeEvent(object):
    """Arrival or departure of a StopTimeUpdate.

  delay: int seconds relative to the schedule or None
  time: int POSIX time or None
  """

    __slots__ = ("delay", "time")

    def __init__(self, delay=None, time=None):
        self.delay = delay
        self.time = time

    def HasDelayOrTime(self):
        return self.delay is not None or self.time is not None

    def __repr__(self):
        return "<StopTimeEvent delay=%r time=%r>" % (self.delay, self.time)


class StopTimeUpdate(object):
    """Real-time update for one stop of a trip.

  stop_sequence: int or None
  stop_id: str or None
  schedule_relationship: one of SCHEDULED, SKIPPED, NO_DATA, UNSCHEDULED or
                         None
  arrival: StopTimeEvent or None
  departure: StopTimeEvent or None
  """

    __slots__ = (
        "stop_sequence",
        "stop_id",
        "schedule_relationship",
        "arrival",
        "departure",
    )

    def __init__(
        self,
        stop_sequence=None,
        stop_id=None,
        schedule_relationship=None,
        arrival=None,
        departure=None,
    ):
        self.stop_sequence = stop_sequence
        self.stop_id = stop_id
        self.schedule_relationship = schedule_relationship
        self.arrival = arrival
        self.departure = departure

    def HasStopSequence(self):
        return self.stop_sequence is not None

    def HasStopId(self):
        return self.stop_id is not None

    def HasArrival(self):
        return self.arrival is not None

    def HasDeparture(self):
        return self.departure is not None

    def GetStopLabel(self):
        """Return a short text naming this update in occurrence messages."""
        if self.HasStopSequence():
            return "stop_sequence %d" % self.stop_sequence
        elif self.HasStopId():
            return "stop_id %s" % self.stop_id
        return ""

    def __repr__(self):
        return "<StopTimeUpdate %s>" % (self.GetStopLabel() or "unidentified")


class TripUpdate(object):
    """Real-time progress of one trip.

  trip_id: str or None
  schedule_relationship: one of the TRIP_* values or None
  stop_time_updates: sequence of StopTimeUpdate in feed order
  entity_id: id of the feed entity carrying this update, or None
  """

    __slots__ = (
        "trip_id",
        "schedule_relationship",
        "stop_time_updates",
        "entity_id",
    )

    def __init__(
        self,
        trip_id=None,
        schedule_relationship=None,
        stop_time_updates=(),
        entity_id=None,
    ):
        self.trip_id = trip_id
        self.schedule_relationship = schedule_relationship
        self.stop_time_updates = tuple(stop_time_updates)
        self.entity_id = entity_id

    def HasTripId(self):
        return self.trip_id is not None

    def IsCanceled(self):
        return self.schedule_relationship == TRIP_CANCELED

    def GetTripLabel(self):
        """Return the text starting every occurrence message of this trip."""
        if self.HasTripId():
            return "trip_id %s" % self.trip_id
        return "entity ID %s" % self.entity_id

    def __repr__(self):
        return "<TripUpdate %s>" % self.GetTripLabel()


class FeedSnapshot(object):
    """The trip updates of one GTFS-realtime feed message.

  trip_updates: sequence of TripUpdate in feed order
  timestamp: int POSIX time of the feed header or None
  """

    __slots__ = ("trip_updates", "timestamp")

    def __init__(self, trip_updates=(), timestamp=None):
        self.trip_updates = tuple(trip_updates)
        self.timestamp = timestamp

    def __len__(self):
        return len(self.trip_updates)

    def __iter__(self):
        return iter(self.trip_updates)


class StaticStopEntry(object):
    """One stop_times.txt row of a trip, reduced to what the realtime
  checks need."""

    __slots__ = ("stop_sequence", "stop_id")

    def __init__(self, stop_sequence, stop_id):
        self.stop_sequence = stop_sequence
        self.stop_id = stop_id

    def __eq__(self, other):
        if not isinstance(other, StaticStopEntry):
            return NotImplemented
        return (self.stop_sequence, self.stop_id) == (
            other.stop_sequence,
            other.stop_id,
        )

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash((self.stop_sequence, self.stop_id))

    def __repr__(self):
        return "<StaticStopEntry %d %s>" % (self.stop_sequence, self.stop_id)
